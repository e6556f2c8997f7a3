import io
import socket

import pytest

from tcphttp.httpserver import handler, main
from tcphttp.request import Request, RequestLine
from tcphttp.response import StatusCode, Writer, status_line
from tcphttp.server import serve


def _respond(target):
    stream = io.BytesIO()
    request = Request(
        request_line=RequestLine(http_version="1.1", request_target=target, method="GET")
    )
    handler(Writer(stream), request)
    return stream.getvalue()


def _split(response):
    head, _, body = response.partition(b"\r\n\r\n")
    lines = head.decode().split("\r\n")
    headers = dict(line.split(": ", 1) for line in lines[1:])
    return lines[0], headers, body


@pytest.mark.parametrize(
    "target, status",
    [
        ("/", StatusCode.OK),
        ("/anything", StatusCode.OK),
        ("/give400", StatusCode.BAD_REQUEST),
        ("/give500", StatusCode.INTERNAL_SERVER_ERROR),
    ],
)
def test_status_follows_target(target, status):
    assert _respond(target).startswith(status_line(status))


@pytest.mark.parametrize("target", ["/", "/give400", "/give500"])
def test_headers_describe_html_body(target):
    _, headers, body = _split(_respond(target))
    assert headers["content-length"] == str(len(body))
    assert headers["content-type"] == "text/html"
    assert headers["connection"] == "close"


@pytest.mark.parametrize(
    "target, fragments",
    [
        ("/", ["<h1>Success!</h1>", "すごい！", "<title>200 OK</title>"]),
        ("/give400", ["<h1>Bad Request</h1>", "にがい"]),
        ("/give500", ["<h1>Internal Server Error</h1>", "すいません"]),
    ],
)
def test_body_content(target, fragments):
    _, _, body = _split(_respond(target))
    text = body.decode("utf-8")
    for fragment in fragments:
        assert fragment in text


def test_served_over_tcp():
    with serve(0, handler) as server:
        with socket.create_connection(("127.0.0.1", server.port), timeout=5) as sock:
            sock.sendall(b"GET /give500 HTTP/1.1\r\nHost: localhost:42069\r\n\r\n")
            chunks = []
            while chunk := sock.recv(4096):
                chunks.append(chunk)
    response = b"".join(chunks)
    assert response.startswith(status_line(StatusCode.INTERNAL_SERVER_ERROR))
    assert "すいません".encode() in response


def test_main_rejects_bad_port():
    with pytest.raises(SystemExit) as excinfo:
        main(["--port", "not-a-port"])
    assert excinfo.value.code == 2