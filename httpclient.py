#!/usr/bin/env python3

import socket, json, time, re, logging
from enum import Enum
from dataclasses import dataclass, field
from urllib.parse import urlparse
from contextlib import closing

logger = logging.getLogger(__name__)

HTTP_PORT = 80
USER_AGENT = "Custom-HTTP-Client"

STATUS_TEXT = {
    100: "Continue", 101: "Switching Protocols", 102: "Processing", 103: "Early Hints",
    200: "OK", 201: "Created", 202: "Accepted", 203: "Non-Authoritative Information",
    204: "No Content", 205: "Reset Content", 206: "Partial Content", 207: "Multi-Status",
    208: "Already Reported", 226: "IM Used",
    300: "Multiple Choices", 301: "Moved Permanently", 302: "Found", 303: "See Other",
    304: "Not Modified", 305: "Use Proxy", 307: "Temporary Redirect", 308: "Permanent Redirect",
    400: "Bad Request", 401: "Unauthorized", 402: "Payment Required", 403: "Forbidden",
    404: "Not Found", 405: "Method Not Allowed", 406: "Not Acceptable",
    407: "Proxy Authentication Required", 408: "Request Timeout", 409: "Conflict", 410: "Gone",
    411: "Length Required", 412: "Precondition Failed", 413: "Payload Too Large",
    414: "URI Too Long", 415: "Unsupported Media Type", 416: "Range Not Satisfiable",
    417: "Expectation Failed", 418: "I'm a teapot", 421: "Misdirected Request",
    422: "Unprocessable Content", 423: "Locked", 424: "Failed Dependency", 425: "Too Early",
    426: "Upgrade Required", 428: "Precondition Required", 429: "Too Many Requests",
    431: "Request Header Fields Too Large", 451: "Unavailable For Legal Reasons",
    500: "Internal Server Error", 501: "Not Implemented", 502: "Bad Gateway",
    503: "Service Unavailable", 504: "Gateway Timeout", 505: "HTTP Version Not Supported",
    506: "Variant Also Negotiates", 507: "Insufficient Storage", 508: "Loop Detected",
    510: "Not Extended", 511: "Network Authentication Required",
}


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


class ErrorKind(Enum):
    INVALID_URL = "Invalid URL"
    CONNECTION = "Connection error"
    SERIALIZATION = "Serialization error"


class RequestError(Exception):
    """Failure of a single exchange, tagged with its ErrorKind"""

    def __init__(self, kind, message):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self):
        return f"{self.kind.value}: {self.message}"


@dataclass
class HttpResponse:
    status_code: int
    status_text: str
    json_body: str
    duration: float
    headers: dict = field(default_factory=dict)


def status_text(code):
    """Reason phrase from the static table, "Unknown" if unregistered"""
    return STATUS_TEXT.get(code, "Unknown")


def build_request(method, host, path, json_body=None):
    """Assemble the request text, appending the serialized body after the blank line"""
    req = (f"{HttpMethod(method).value} {path} HTTP/1.1\r\nHost: {host}\r\n"
           f"User-Agent: {USER_AGENT}\r\nConnection: close\r\n\r\n")
    if json_body is not None:
        try:
            req += json.dumps(json_body) + "\r\n"
        except (TypeError, ValueError) as e:
            raise RequestError(ErrorKind.SERIALIZATION, str(e)) from e
    return req


def split_lines(text):
    """Split on '\\n' only, dropping one trailing '\\r' per line and a final empty line"""
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def parse_status_code(response):
    """Second token of the status line, 0 when absent or outside 0-65535"""
    lines = split_lines(response)
    parts = lines[0].split() if lines else []
    if len(parts) > 1 and re.fullmatch(r'\+?[0-9]+', parts[1]) and int(parts[1]) <= 0xFFFF:
        return int(parts[1])
    return 0


def parse_headers(response):
    """Header lines up to the first empty line, split on the first ': '"""
    headers = {}
    for line in split_lines(response)[1:]:
        if not line:
            break
        name, sep, value = line.partition(': ')
        if sep:
            headers[name] = value
        else:
            headers[line] = ''
    return headers


def extract_json_body(response):
    """Slice from the first '{' to the last '}' of the raw response"""
    start = response.find('{')
    end = response.rfind('}')
    return response[max(start, 0):end + 1 if end != -1 else len(response)]


def resolve(host):
    """Probe host:HTTP_PORT directly, falling back to the first DNS address"""
    try:
        with closing(socket.create_connection((host, HTTP_PORT))):
            return host
    except (OSError, UnicodeError):
        logger.info("Probe of %s:%d failed, falling back to DNS", host, HTTP_PORT)
    try:
        infos = socket.getaddrinfo(host, HTTP_PORT, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as e:
        logger.warning("DNS lookup for %s failed: %s", host, e)
        return None
    return infos[0][4][0]


def request(method, url, json_body=None):
    """Perform one HTTP/1.1 exchange; returns None when the host cannot be resolved"""
    start = time.monotonic()

    try:
        parsed = urlparse(url)
        host = parsed.hostname
        # validated only; the connection always goes to HTTP_PORT
        parsed.port
    except ValueError as e:
        raise RequestError(ErrorKind.INVALID_URL, str(e)) from e
    if not parsed.scheme:
        raise RequestError(ErrorKind.INVALID_URL, "relative URL without a base")
    if not host:
        raise RequestError(ErrorKind.INVALID_URL, "Missing host")
    if any(c.isspace() for c in host):
        raise RequestError(ErrorKind.INVALID_URL, f"invalid host {host!r}")
    path = parsed.path or '/'

    if parsed.scheme == 'https':
        logger.warning("%s requested over https; sending plaintext on port %d", url, HTTP_PORT)

    address = resolve(host)
    if address is None:
        return None

    logger.debug("Connecting to %s:%d", address, HTTP_PORT)
    try:
        s = socket.create_connection((address, HTTP_PORT))
    except OSError as e:
        raise RequestError(ErrorKind.CONNECTION, str(e)) from e

    with closing(s):
        req = build_request(method, host, path, json_body)
        try:
            s.sendall(req.encode())
            raw = b''.join(iter(lambda: s.recv(8192), b''))
        except OSError as e:
            raise RequestError(ErrorKind.CONNECTION, str(e)) from e

    response = raw.decode('utf-8', errors='replace')
    code = parse_status_code(response)
    headers = parse_headers(response)
    json_body = extract_json_body(response)
    result = HttpResponse(
        status_code=code,
        status_text=status_text(code),
        json_body=json_body,
        duration=time.monotonic() - start,
        headers=headers,
    )
    logger.info("%s %s -> %d %s in %.3fs", HttpMethod(method).value, url,
                result.status_code, result.status_text, result.duration)
    return result
