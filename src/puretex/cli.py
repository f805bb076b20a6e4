"""Command-line interface for puretex"""
import sys
import argparse
import logging

from .convert import ConvertOptions, FAILED, SKIPPED, convert_paths, is_tex_path, iter_input_files
from .errors import TexError
from .log import setup_logging
from .tex import TEX

logger = logging.getLogger(__name__)


def main(argv=None):
    """Command-line interface for puretex"""
    parser = argparse.ArgumentParser(
        prog='puretex',
        description='Convert CM3D2 TEX texture files to PNG and images back to TEX',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
All .tex files are converted to .png (with a .png.uv.csv file when the texture
carries UV rects). All other readable images are converted to .tex: PNG payload,
version 1010, or 1011 when an <image>.uv.csv file sits next to the image.

Examples:
  puretex texture.tex                       # Convert to texture.png
  puretex face.png                          # Convert to face.tex
  puretex textures/ -o converted/           # Convert a whole folder
  puretex texture.tex --info                # Display TEX file info
        """
    )

    parser.add_argument('paths', nargs='+', help='Input files and folders')
    parser.add_argument('-o', '--output-dir',
                        help='Folder for converted files (default: next to each input)')
    parser.add_argument('--overwrite', action='store_true',
                        help='Replace existing outputs instead of adding a numeric suffix')
    parser.add_argument('--info', action='store_true',
                        help='Print TEX header information instead of converting')
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Show debug output')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Only show errors')

    args = parser.parse_args(argv)

    level = 'DEBUG' if args.verbose else 'ERROR' if args.quiet else 'INFO'
    setup_logging(level)

    if args.info:
        return print_info(args.paths)

    options = ConvertOptions(output_dir=args.output_dir, overwrite=args.overwrite)
    results = convert_paths(args.paths, options)

    failed = sum(1 for result in results if result.status == FAILED)
    skipped = sum(1 for result in results if result.status == SKIPPED)
    logger.info("Processed %d file(s): %d converted, %d skipped, %d failed",
                len(results), len(results) - failed - skipped, skipped, failed)
    return 1 if failed else 0


def print_info(paths) -> int:
    """Print the header of every .tex file under paths"""
    status = 0
    for path in iter_input_files(paths):
        if not is_tex_path(path):
            continue
        try:
            tex = TEX.from_file(path)
        except (TexError, OSError) as e:
            print(f"Error parsing {path}: {e}")
            status = 1
            continue
        print(path)
        print(tex)
    return status


if __name__ == "__main__":
    sys.exit(main())
