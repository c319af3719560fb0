"""OTP-X CLI — command-line interface for the one-time-pad image toolchain."""

import argparse
import sys

from otpx.logging import audit, get_logger, setup_logging

log = get_logger("cli")


def _read_message(stream) -> str:
    """Read the whole message without newline translation."""
    raw = stream.buffer.read() if hasattr(stream, "buffer") else stream.read()
    return raw.decode("utf-8") if isinstance(raw, bytes) else raw


def cmd_encode(args):
    """Encode a message from stdin into a cipher bitmap."""
    from otpx.console import render_to_console
    from otpx.font import load_font
    from otpx.pad import load_pad
    from otpx.pbm import load_hint
    from otpx.pipeline import encode_message, write_outputs

    pad = load_pad(args.pad)
    font = load_font(args.font)
    hint = load_hint(args.hint)
    message = _read_message(sys.stdin)

    result = encode_message(message, font, pad, hint=hint, cursor=args.cursor)

    if not args.quiet:
        print(f"plaintext:\n{message}")
        print("plaintext bitmap:")
        render_to_console(result.plaintext, font)
        print("ciphertext bitmap:")
        render_to_console(result.ciphertext, font)

    written = write_outputs(result, args.output, png_path=args.png)
    for path in written:
        print(f"Saved to: {path} ({result.side}x{result.side})")
    print(f"Pad cursor: {result.cursor}/{len(pad)}")


def cmd_keygen(args):
    """Write a random pad file."""
    from otpx.pad import generate_pad, write_pad

    pad = generate_pad(args.length, seed=args.seed)
    path = write_pad(pad, args.output)
    print(f"Generated: {path} ({len(pad)} bits, {int(pad.bits.sum())} set)")


def cmd_fonts(args):
    """List the built-in fonts."""
    from otpx.font import BUILTIN_FONTS, BUILTIN_PREFIX, builtin_font

    for name in sorted(BUILTIN_FONTS):
        font = builtin_font(name)
        print(f"  {BUILTIN_PREFIX}{name:8s} {font.size}x{font.size}  {font.chars}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="otpx", description="OTP-X: one-time-pad cipher images")

    # Global logging flags
    parser.add_argument("-V", "--verbose", action="store_true", help="Enable DEBUG-level logging")
    parser.add_argument("--log-file", default=None, help="Write JSON logs to file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- encode ---
    p_enc = subparsers.add_parser(
        "encode",
        help="Encode a message from stdin to a PBM file",
        description="Encode a message from stdin, using the given one-time pad and square font, "
                    "to a PBM file. Newlines in the message start a new encoded line.",
    )
    p_enc.add_argument("pad", help="Pad file: one bit per line, or OEIS 'index value' records")
    p_enc.add_argument("font", help="Font file, or builtin:<name>")
    p_enc.add_argument("output", help="Output PBM path")
    p_enc.add_argument("-H", "--hint", default=None, help="Hint PBM placed below the code")
    p_enc.add_argument("--png", default=None, help="Also save a PNG (or any Pillow format) here")
    p_enc.add_argument("--cursor", type=int, default=0, help="Pad position of the first key bit")
    p_enc.add_argument("-q", "--quiet", action="store_true", help="Do not print the console renditions")

    # --- keygen ---
    p_key = subparsers.add_parser("keygen", help="Write a random pad file (not cryptographically secure)")
    p_key.add_argument("length", type=int, help="Number of bits")
    p_key.add_argument("output", help="Output pad path")
    p_key.add_argument("--seed", type=int, default=None, help="Seed for reproducible pads")

    # --- fonts ---
    subparsers.add_parser("fonts", help="List built-in fonts")

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Keep stdout renditions readable unless asked for more
    level = "DEBUG" if args.verbose else "ERROR"
    setup_logging(level=level, log_file=args.log_file)
    audit("cli.start", logger=log, command=args.command, verbose=args.verbose)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    commands = {
        "encode": cmd_encode,
        "keygen": cmd_keygen,
        "fonts": cmd_fonts,
    }
    try:
        commands[args.command](args)
    except (ValueError, OSError) as e:
        audit("cli.failed", logger=log, command=args.command, error=str(e))
        print(f"otpx: error: {e}", file=sys.stderr)
        sys.exit(1)
    audit("cli.done", logger=log, command=args.command)


if __name__ == "__main__":
    main()
