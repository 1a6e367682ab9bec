#!/usr/bin/env python3

import sys, logging, argparse

import httpclient
from httpclient import HttpMethod, RequestError


def http_delete(url):
    """DELETE url; 200 and 204 count as success. Returns the exit code"""
    try:
        resp = httpclient.request(HttpMethod.DELETE, url)
    except RequestError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1

    if resp is None:
        print("Connection timeout or invalid URL", file=sys.stderr)
        return 1

    if resp.status_code in (200, 204):
        print(f"Delete successful (Status: {resp.status_code} {resp.status_text})")
    else:
        print(f"Unexpected response: {resp.status_code} {resp.status_text}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="HTTP DELETE client")
    parser.add_argument('--url', required=True, help='URL of the resource to delete')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return http_delete(args.url)


if __name__ == "__main__":
    sys.exit(main())
