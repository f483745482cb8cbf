#!/usr/bin/env python3
"""Talkalong management CLI."""
import argparse
import json
import sys
import time


def serve(args):
    """Run the HTTP API server."""
    from talkalong.api.app import create_app
    from talkalong.config import Config

    host = args.host or Config.HOST
    port = args.port or Config.PORT
    app = create_app()
    print(f"Starting server at http://{host}:{port}")
    app.run(host=host, port=port, debug=Config.DEBUG)


def suggestions(args):
    """List suggested episodes from the configured channel."""
    from talkalong.config import Config
    from talkalong.youtube.client import YouTubeClient

    client = YouTubeClient(api_key=Config.YOUTUBE_API_KEY)
    if not client.api_key:
        print("YOUTUBE_API_KEY is not set; no suggestions available.")
        return

    channel_id = args.channel or Config.YOUTUBE_CHANNEL_ID
    videos = client.get_suggestions(channel_id)
    print(f"Found {len(videos)} suggested episodes:")
    for video in videos:
        minutes, seconds = divmod(video.duration_sec, 60)
        print(f"  {video.video_id}  {minutes:2d}:{seconds:02d}  {video.title}")


def captions(args):
    """Print the parsed caption transcript for a video."""
    from talkalong.youtube.captions import CaptionClient
    from talkalong.youtube.timestamp import format_prompt_timestamp, resolve_video_id

    video_id = resolve_video_id(args.video)
    if not video_id:
        print(f"Error: could not read a video ID from {args.video!r}")
        sys.exit(1)

    entries = CaptionClient(languages=args.lang).fetch_transcript(video_id)
    if not entries:
        print("No captions available.")
        return

    for entry in entries:
        print(f"[{format_prompt_timestamp(entry.ts)}] {entry.text}")
    print(f"\n{len(entries)} caption lines")


def _load_transcript(path):
    from talkalong.models import TranscriptEntry

    with open(path) as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("transcript", [])
    entries = [TranscriptEntry.from_dict(item) for item in data if isinstance(item, dict)]
    return [entry for entry in entries if entry.text]


def _print_analysis(result):
    print(f"Source: {result.source}")
    if result.error:
        print(f"Warning: {result.error}")
    if result.analysis.summary:
        print(f"Summary: {result.analysis.summary}")
    for pair in result.analysis.highlight_pairs:
        print(f"\n  [{int(pair.ts) // 60:02d}:{int(pair.ts) % 60:02d}] {pair.child_line}")
        print(f"    partner: {pair.partner_line}")
        print(f"    context: {pair.context}")
        print(f"    tip:     {pair.tip}")


def analyze(args):
    """Analyze a video's captions or a saved transcript into highlight pairs."""
    from talkalong.api.services import build_services
    from talkalong.config import Config
    from talkalong.youtube.captions import parse_webvtt
    from talkalong.youtube.timestamp import resolve_video_id

    video_id = resolve_video_id(args.video)
    if not video_id:
        print(f"Error: could not read a video ID from {args.video!r}")
        sys.exit(1)

    services = build_services(Config)
    meta = services.youtube.fetch_video_meta(video_id)
    print(f"Video: {meta.title} ({meta.duration_sec}s)")

    if args.transcript:
        transcript = _load_transcript(args.transcript)
        print(f"Loaded {len(transcript)} transcript lines from {args.transcript}")
    else:
        document = services.captions.fetch_webvtt(video_id)
        transcript = parse_webvtt(document) if document else []
        print(f"Fetched {len(transcript)} caption lines")

    if not transcript:
        print("Nothing to analyze.")
        return

    _print_analysis(services.orchestrator.analyze(transcript, meta))


def capture(args):
    """Replay an audio file through the capture pipeline."""
    from talkalong.capture import CaptureError, CapturePipeline, FileAudioRecorder
    from talkalong.config import Config
    from talkalong.transcription.whisper import HttpTranscriber, get_transcriber
    from talkalong.youtube.timestamp import format_prompt_timestamp, resolve_video_id

    video_id = resolve_video_id(args.video)
    if not video_id:
        print(f"Error: could not read a video ID from {args.video!r}")
        sys.exit(1)

    if args.server:
        transcriber = HttpTranscriber(args.server)
    else:
        transcriber = get_transcriber(Config)
        if transcriber is None:
            print("Error: set OPENAI_API_KEY or pass --server to transcribe slices.")
            sys.exit(1)

    slice_ms = args.slice_ms or Config.SLICE_MS
    recorder = FileAudioRecorder(args.audio, slice_seconds=slice_ms / 1000)
    pipeline = CapturePipeline(
        recorder=recorder,
        transcriber=transcriber,
        clock=lambda: recorder.position,
        slice_ms=slice_ms,
        on_entry=lambda entry: print(f"  [{format_prompt_timestamp(entry.ts)}] {entry.text}"),
    )

    try:
        pipeline.start(video_id)
    except CaptureError as e:
        print(f"Error ({e.kind.value}): {e.message}")
        sys.exit(1)

    print(f"Capturing {args.audio} in {slice_ms} ms slices (Ctrl+C to stop)...")
    try:
        while recorder.stream is not None and not recorder.stream.exhausted:
            time.sleep(0.5)
    except KeyboardInterrupt:
        print("\nStopping...")

    pipeline.stop(wait=True)
    pipeline.close()
    entries = pipeline.transcript.entries()
    print(f"\nTranscript: {len(entries)} lines")

    if args.output:
        with open(args.output, "w") as f:
            json.dump({"videoId": video_id, "transcript": [e.to_dict() for e in entries]}, f, indent=2)
        print(f"  Saved to {args.output}")

    if args.analyze and entries:
        from talkalong.api.services import build_services

        services = build_services(Config)
        meta = services.youtube.fetch_video_meta(video_id)
        _print_analysis(services.orchestrator.analyze(entries, meta))


def main():
    from talkalong.config import configure_logging

    parser = argparse.ArgumentParser(description="Talkalong management CLI")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL env or INFO)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API server")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: HOST env)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: PORT env)")

    suggestions_parser = subparsers.add_parser("suggestions", help="List suggested episodes")
    suggestions_parser.add_argument("--channel", default=None, help="Channel ID (default: YOUTUBE_CHANNEL_ID env)")

    captions_parser = subparsers.add_parser("captions", help="Print a video's caption transcript")
    captions_parser.add_argument("video", help="YouTube URL or video ID")
    captions_parser.add_argument("--lang", action="append", default=None, help="Caption language (repeatable, default: en)")

    analyze_parser = subparsers.add_parser("analyze", help="Pick highlight pairs for a video")
    analyze_parser.add_argument("video", help="YouTube URL or video ID")
    analyze_parser.add_argument("--transcript", default=None, help="JSON transcript file instead of captions")

    capture_parser = subparsers.add_parser("capture", help="Replay an audio file through the capture pipeline")
    capture_parser.add_argument("video", help="YouTube URL or video ID being played")
    capture_parser.add_argument("audio", help="Audio file to use as the capture input")
    capture_parser.add_argument("--server", default=None, help="Transcribe via a running server's /stt (e.g. http://localhost:4000)")
    capture_parser.add_argument("--slice-ms", type=int, default=None, help="Slice length in ms (default: SLICE_MS env or 8000)")
    capture_parser.add_argument("--output", default=None, help="Write the transcript JSON here")
    capture_parser.add_argument("--analyze", action="store_true", help="Analyze the transcript when capture ends")

    args = parser.parse_args()
    configure_logging(args.log_level)

    if args.command == "serve":
        serve(args)
    elif args.command == "suggestions":
        suggestions(args)
    elif args.command == "captions":
        captions(args)
    elif args.command == "analyze":
        analyze(args)
    elif args.command == "capture":
        capture(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
