import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from config.settings import settings
from main import build_json_home_source
from utils.json_home import build_json_home


def main(argv: Optional[List[str]] = None) -> int:
    """Prints the json-home document of a resource catalog file."""

    parser = argparse.ArgumentParser(
        prog="python -m scripts.render_json_home",
        description="Render the json-home document of a resource catalog",
    )

    parser.add_argument(
        "catalog",
        type=Path,
        help="JSON file with the resource declarations",
    )

    args = parser.parse_args(argv)
    config = settings.model_copy(update={"JSONHOME_RESOURCES_FILE": str(args.catalog)})

    json_home = build_json_home_source(config).get_json_home()
    print(json.dumps(build_json_home(json_home), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
