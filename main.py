#!/usr/bin/env python3
"""Command-line entry point: fetch the configured feed once and print the result as JSON."""

import json
import sys
import traceback
from datetime import datetime

from feedreader.config.settings import load_config
from feedreader.core.feed_service import FeedService

def main():
    """Main function to run the feed pipeline once."""
    start_time = datetime.now()
    print(f"====== Feed Reader Started: {start_time} ======", file=sys.stderr)

    try:
        result = FeedService(load_config()).get_feed()
    except Exception as e:
        print(f"ERROR: Feed reader failed with exception: {str(e)}", file=sys.stderr)
        print(traceback.format_exc(), file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))

    duration = datetime.now() - start_time
    print(f"====== Total Duration: {duration} ======", file=sys.stderr)
    return 1 if result.error else 0

if __name__ == "__main__":
    sys.exit(main())
