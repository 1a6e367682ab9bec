#!/usr/bin/env python3

import sys, json, logging, argparse

import httpclient
from httpclient import HttpMethod, RequestError

DEFAULT_COMMENT = {
    "postId": 1,
    "id": 101,
    "name": "John Doe",
    "email": "john.doe@example.com",
    "body": "This is a test comment",
}


def http_post(url, json_data=None):
    """POST json_data to url, expecting 201 Created; returns the exit code"""
    try:
        resp = httpclient.request(HttpMethod.POST, url, json_data)
    except RequestError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1

    if resp is None:
        print("Request was successful, but no response received")
    elif resp.status_code == 201:
        print("Post successful (Status: 201 Created)")
        print(f"Response JSON body:\n{resp.json_body}")
    else:
        print(f"Unexpected response: {resp.status_code} {resp.status_text}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="HTTP POST client")
    parser.add_argument('--url', required=True, help='URL to send POST request to')
    parser.add_argument('--json', help='JSON data to send (as string); defaults to a sample comment')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        json_data = json.loads(args.json) if args.json else DEFAULT_COMMENT
    except json.JSONDecodeError as e:
        parser.error(f"--json is not valid JSON: {e}")
    return http_post(args.url, json_data)


if __name__ == "__main__":
    sys.exit(main())
