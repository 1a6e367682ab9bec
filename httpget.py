#!/usr/bin/env python3

import sys, logging, argparse

import httpclient
from httpclient import HttpMethod, RequestError


def http_get(url):
    """GET url and dump status, body, duration and headers; returns the exit code"""
    try:
        resp = httpclient.request(HttpMethod.GET, url)
    except RequestError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1

    if resp is None:
        print("Invalid URL", file=sys.stderr)
        return 1

    print(f"Response status code: {resp.status_code}")
    print(f"Response status text: {resp.status_text}")
    print(f"Response JSON body:\n{resp.json_body}")
    print(f"Duration: {resp.duration:.3f}s")
    print("Headers:")
    for name, value in resp.headers.items():
        print(f"{name}: {value}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="HTTP GET client")
    parser.add_argument('--url', required=True, help='URL to fetch')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return http_get(args.url)


if __name__ == "__main__":
    sys.exit(main())
