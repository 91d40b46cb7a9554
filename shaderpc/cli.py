"""Command-line interface for the shader precompiler."""

import argparse
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="shaderpc",
        description="Shader precompiler: extracts stage interfaces and the vertex buffer layout",
    )
    parser.add_argument("input", nargs="?", help="Input shader file")
    parser.add_argument(
        "--no-source",
        action="store_true",
        help="Leave stage source text out of the reflection output",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as errors",
    )
    parser.add_argument(
        "--max-word-length", type=int, default=None, metavar="N",
        help="Fail when a single word exceeds N characters",
    )
    parser.add_argument(
        "--max-section-length", type=int, default=None, metavar="N",
        help="Fail when a section's source exceeds N characters",
    )
    parser.add_argument(
        "--version", action="version", version="shaderpc 0.1.0"
    )

    args = parser.parse_args(argv)

    if args.input is None:
        parser.print_help()
        sys.exit(0)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: file not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    from shaderpc.compiler import build_shader
    from shaderpc.codegen.reflection import generate_reflection, emit_reflection_json

    result = build_shader(
        input_path,
        max_word_length=args.max_word_length,
        max_section_length=args.max_section_length,
    )

    for w in result.warnings:
        print(f"Warning: {w}", file=sys.stderr)

    if not result.ok:
        for err in result.errors:
            print(f"Error: {err}", file=sys.stderr)
        sys.exit(int(result.error))

    if args.strict and result.warnings:
        print(f"Error: {len(result.warnings)} warning(s) with --strict", file=sys.stderr)
        sys.exit(1)

    reflection = generate_reflection(
        result.shader,
        source_name=input_path.name,
        include_source=not args.no_source,
    )
    sys.stdout.write(emit_reflection_json(reflection))


if __name__ == "__main__":
    main()
