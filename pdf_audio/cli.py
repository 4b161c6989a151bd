"""Command-line reader: turn a PDF into numbered MP3 chunks without a server."""

import argparse
import logging
import os
import sys

from pdf_audio.constants import (
    CLI_OUTPUT_DIR,
    DEFAULT_MAX_CHARS,
    DEFAULT_RATE,
    DEFAULT_VOICE,
    MIN_CHUNK_CHARS,
    VERSION,
)
from pdf_audio.errors import ExtractionError, SynthesisError, TooShortError
from pdf_audio.pdf import extract_file
from pdf_audio.text import normalize, split_document
from pdf_audio.tts import EdgeTTSSynthesizer, check_length, validate_rate
from pdf_audio.voices import VOICES, list_english_voices


def _rate_arg(value: str) -> str:
    try:
        return validate_rate(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def chunk_filename(index: int) -> str:
    """1-based, zero-padded: chunk 0 → "chunk_001.mp3"."""
    return f"chunk_{index + 1:03d}.mp3"


def chunk_range(total: int, start: int = 1, end: int | None = None) -> range:
    """Convert 1-based inclusive --start/--end into 0-based indexes, clamped."""
    first = max(0, start - 1)
    last = total if end is None else min(end, total)
    return range(first, last)


def cmd_list_voices():
    """Print edge-tts English voices."""
    voices = list_english_voices()
    print("\nAvailable English voices:\n")
    for v in voices:
        print(f"  {v['ShortName']:<30} {v.get('Gender', ''):<8} {v['Locale']}")
    print()


def cmd_read(args) -> int:
    """Extract, chunk and synthesize a PDF. Returns the exit status."""
    if not os.path.exists(args.pdf):
        print(f"Error: PDF file not found: {args.pdf}", file=sys.stderr)
        raise SystemExit(1)

    try:
        extracted = extract_file(args.pdf)
    except ExtractionError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)

    text = normalize(extracted.text, ascii_only=args.ascii_only)
    chunks = split_document(text, args.chunk_size)
    os.makedirs(args.output, exist_ok=True)

    print(f"Reading PDF: {args.pdf}")
    print(f"  Pages: {extracted.page_count}")
    print(f"  Characters: {len(text):,}")
    print(f"  Chunks: {len(chunks)}")
    print(f"  Voice: {args.voice}")
    print(f"  Speed: {args.rate}")

    indexes = chunk_range(len(chunks), args.start, args.end)
    if not indexes:
        print("Nothing to do: chunk range is empty.")
        return 0

    print(f"\nGenerating audio for chunks {indexes[0] + 1} to {indexes[-1] + 1}...\n")
    synthesizer = EdgeTTSSynthesizer()
    failed = []

    for i in indexes:
        chunk = chunks[i]
        output_path = os.path.join(args.output, chunk_filename(i))

        # Skip if already exists (resumability)
        if not args.force and os.path.exists(output_path) and os.path.getsize(output_path) > 0:
            print(f"  [skip] Chunk {i + 1}/{len(chunks)}: {chunk_filename(i)}")
            continue

        print(f"  Chunk {i + 1}/{len(chunks)}... ", end="", flush=True)
        try:
            check_length(chunk.text, MIN_CHUNK_CHARS)
            synthesizer.synthesize(chunk.text, args.voice, args.rate, output_path)
        except (TooShortError, SynthesisError) as e:
            print(f"failed: {e}")
            failed.append(i + 1)
            continue
        print("done")

    print(f"\nDone! Audio files saved to: {args.output}/")
    if failed:
        print(f"Failed chunks: {', '.join(str(n) for n in failed)}", file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    voice_lines = "\n".join(f"  {v.id:<22} ({v.display_name})" for v in VOICES)
    parser = argparse.ArgumentParser(
        prog="pdf-audio",
        description="PDF Audio Reader: read a PDF aloud with edge-tts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Voices:\n{voice_lines}",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("pdf", nargs="?", help="Path to the PDF file")
    parser.add_argument("--voice", default=DEFAULT_VOICE, help=f"Voice to use (default: {DEFAULT_VOICE})")
    parser.add_argument("--rate", default=DEFAULT_RATE, type=_rate_arg, help="Speed, e.g. -30%% to +50%% (default: +0%%)")
    parser.add_argument("--start", type=int, default=1, help="First chunk number, 1-based")
    parser.add_argument("--end", type=int, default=None, help="Last chunk number, inclusive")
    parser.add_argument("--output", default=CLI_OUTPUT_DIR, help=f"Output directory (default: ./{CLI_OUTPUT_DIR})")
    parser.add_argument("--chunk-size", type=int, default=DEFAULT_MAX_CHARS, help="Characters per chunk")
    parser.add_argument("--ascii-only", action="store_true", help="Replace non-ASCII characters with spaces")
    parser.add_argument("--force", action="store_true", help="Regenerate chunks that already exist")
    parser.add_argument("--list-voices", action="store_true", help="List available English voices and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.list_voices:
        cmd_list_voices()
        return

    if not args.pdf:
        parser.print_help()
        return

    status = cmd_read(args)
    if status:
        raise SystemExit(status)


if __name__ == "__main__":
    main()
