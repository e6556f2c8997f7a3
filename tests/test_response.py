import io

import pytest

from tcphttp.headers import Headers
from tcphttp.response import (
    StatusCode,
    Writer,
    WriterStateError,
    get_default_headers,
    status_line,
)


def test_status_line_ok():
    assert status_line(StatusCode.OK) == b"HTTP/1.1 200 OK\r\n"


@pytest.mark.parametrize(
    "code, reason",
    [
        (StatusCode.BAD_REQUEST, "Bad Request"),
        (StatusCode.INTERNAL_SERVER_ERROR, "Internal Server Error"),
    ],
)
def test_status_line_reasons(code, reason):
    line = status_line(code)
    assert line == f"HTTP/1.1 {int(code)} {reason}\r\n".encode()


def test_status_line_unknown_code_has_empty_reason():
    assert status_line(418) == b"HTTP/1.1 418 \r\n"


def test_default_headers():
    headers = get_default_headers(13)
    assert dict(headers) == {
        "content-length": "13",
        "connection": "close",
        "content-type": "text/plain",
    }


def test_default_headers_override_content_type():
    headers = get_default_headers(0)
    headers.override("Content-Type", "text/html")
    assert headers.get_value("content-type") == "text/html"
    assert headers.get_value("content-length") == "0"


def test_full_response_round_trip():
    stream = io.BytesIO()
    writer = Writer(stream)
    body = "<h1>Success!</h1><p>すごい！</p>".encode()
    headers = get_default_headers(len(body))
    headers.override("Content-Type", "text/html")

    writer.write_status_line(StatusCode.OK)
    writer.write_headers(headers)
    writer.write_body(body)

    output = stream.getvalue()
    assert output.startswith(status_line(StatusCode.OK))
    head, separator, written_body = output.partition(b"\r\n\r\n")
    assert separator == b"\r\n\r\n"
    assert written_body == body

    header_block = head[len(status_line(StatusCode.OK)):] + b"\r\n\r\n"
    parsed = Headers()
    while True:
        consumed, done = parsed.parse(header_block)
        if done:
            break
        header_block = header_block[consumed:]
    assert parsed == headers


def test_headers_before_status_line_rejected():
    writer = Writer(io.BytesIO())
    with pytest.raises(WriterStateError):
        writer.write_headers(Headers())


def test_body_before_headers_rejected():
    stream = io.BytesIO()
    writer = Writer(stream)
    writer.write_status_line(StatusCode.OK)
    with pytest.raises(WriterStateError):
        writer.write_body(b"early")
    assert stream.getvalue() == status_line(StatusCode.OK)


def test_second_status_line_rejected():
    writer = Writer(io.BytesIO())
    writer.write_status_line(StatusCode.OK)
    with pytest.raises(WriterStateError):
        writer.write_status_line(StatusCode.BAD_REQUEST)


def test_nothing_after_body():
    writer = Writer(io.BytesIO())
    writer.write_status_line(StatusCode.INTERNAL_SERVER_ERROR)
    writer.write_headers(get_default_headers(0))
    writer.write_body(b"")
    with pytest.raises(WriterStateError):
        writer.write_body(b"again")