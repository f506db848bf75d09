#!/usr/bin/env python3
"""
Export sorted color stripe lists from text files.

Each input file holds one '<title> rgb(r,g,b)' color per line. The colors are
sorted, split into luminosity groups and written as a standalone HTML stripe
page, optionally with a CSV table of the derived sort metrics.
"""

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path

from tqdm import tqdm

from streamlit_app.utils import charts, color_utils, data_loader
from streamlit_app.utils.color_utils import SortMethod

logger = logging.getLogger(__name__)


def group_count_arg(value):
    """argparse type for the group count (1-4)."""
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid group count: {value!r}") from None
    if not color_utils.MIN_GROUPS <= count <= color_utils.MAX_GROUPS:
        raise argparse.ArgumentTypeError(
            f"group count must be between {color_utils.MIN_GROUPS} and {color_utils.MAX_GROUPS}"
        )
    return count


def export_stripes(input_file, output_dir, method=SortMethod.LUMINOSITY,
                   group_count=color_utils.DEFAULT_GROUP_COUNT, write_csv=False):
    """
    Sort one color list and write its stripe page.

    Args:
        input_file: Path to the color list
        output_dir: Directory for the exports
        method: Sort method
        group_count: Number of luminosity groups
        write_csv: Also write a CSV table of the sorted colors

    Returns:
        List of written paths
    """
    input_file = Path(input_file)
    output_dir = Path(output_dir)

    records = data_loader.read_color_file(input_file)
    groups = color_utils.sort_and_group(records, method, group_count)

    html_path = output_dir / f"{input_file.stem}_stripes.html"
    html_path.write_text(
        charts.create_stripe_page_html(groups, title=input_file.stem, method=method),
        encoding='utf-8'
    )
    written = [html_path]

    if write_csv:
        csv_path = output_dir / f"{input_file.stem}_stripes.csv"
        charts.create_groups_dataframe(groups).to_csv(csv_path, index=False)
        written.append(csv_path)

    logger.info(
        f"{input_file.name}: {len(records)} colors -> "
        f"{', '.join(str(path) for path in written)}"
    )
    return written


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Sort color lists and export them as stripe pages"
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        help="Text files with one '<title> rgb(r,g,b)' line per color"
    )
    parser.add_argument(
        "--method",
        choices=[method.value for method in SortMethod],
        default=SortMethod.LUMINOSITY.value,
        help="Sort method (default: luminosity)"
    )
    parser.add_argument(
        "--groups",
        type=group_count_arg,
        default=color_utils.DEFAULT_GROUP_COUNT,
        help="Number of luminosity groups, 1-4 (default: 1)"
    )
    parser.add_argument(
        "--output-dir",
        default="exports",
        help="Output directory for exports"
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Also export a CSV table per input"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    # Outputs are named after the input stem
    stems = Counter(Path(input_path).stem for input_path in args.inputs)
    for stem, count in stems.items():
        if count > 1:
            logger.warning(f"{count} inputs share the name '{stem}'; later exports overwrite {stem}_stripes.*")

    failures = 0
    for input_path in tqdm(args.inputs, desc="Exporting stripes", disable=len(args.inputs) < 2):
        try:
            export_stripes(input_path, output_dir, args.method, args.groups, args.csv)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not export {input_path}: {e}")
            failures += 1

    logger.info(f"Exported {len(args.inputs) - failures}/{len(args.inputs)} files to {output_dir.absolute()}")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
