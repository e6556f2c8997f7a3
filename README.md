# tcphttp

A small HTTP/1.1 server written straight on top of TCP sockets. It has:

- an incremental request parser (`tcphttp.request`) that works on data
  arriving in chunks of any size,
- a header map (`tcphttp.headers.Headers`) with lower-case keys that merges
  repeated headers,
- a response writer (`tcphttp.response.Writer`) that enforces the order
  status line, headers, body,
- a threaded server (`tcphttp.server`) that hands each parsed request to
  your handler.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Commands

Run the demo HTTP server (port 42069 unless `--port` is given):

```
tcphttp-server
tcphttp-server --port 8080
```

Requests for `/give400` get a `400 Bad Request` HTML page and requests for
`/give500` get a `500 Internal Server Error` HTML page. Every other path gets
a `200 OK` HTML page. Stop the server with Ctrl-C or SIGTERM. If the port
cannot be opened, the command logs the error and exits with status 1.

Run a raw listener (port 42069 unless `--port` is given). It accepts one
connection at a time and prints the request line, the headers and the body
of each request it receives, the body as a list of byte values:

```
tcphttp-listener
tcphttp-listener --port 8080
```

A request that cannot be parsed is logged and the listener moves on to the
next connection.

## Using the library

```python
from tcphttp.response import StatusCode, get_default_headers
from tcphttp.server import serve


def hello(writer, request):
    body = b"hello from " + request.request_line.request_target.encode()
    writer.write_status_line(StatusCode.OK)
    writer.write_headers(get_default_headers(len(body)))
    writer.write_body(body)


with serve(8080, hello) as server:
    input(f"Serving on port {server.port}, press Enter to stop\n")
```

`serve(port, handler)` starts listening at once and accepts connections on a
background thread; each connection is handled on its own thread. Pass port
`0` to let the system pick a free port and read it back from `server.port`.
`Server.close()` stops accepting connections; a `Server` is also a context
manager that closes itself on exit.

The handler is called as `handler(writer, request)` with a
`tcphttp.response.Writer` and a `tcphttp.request.Request`. The connection is
closed once the handler returns. If a request cannot be parsed, the server
replies `400 Bad Request` with a plain-text body and does not call the
handler.

`tcphttp.httpserver.handler` is the handler the demo server uses, and can be
passed to `serve` directly.

### Parsing requests

`request_from_reader` reads from any object that has a `read(n)` method
returning at most `n` bytes and `b""` at the end of the stream, such as an
unbuffered socket file or `io.BytesIO`:

```python
import io
from tcphttp.request import request_from_reader

raw = b"POST /submit HTTP/1.1\r\nContent-Length: 5\r\n\r\nhello"
req = request_from_reader(io.BytesIO(raw))
req.request_line.method                  # "POST"
req.request_line.request_target          # "/submit"
req.request_line.http_version            # "1.1"
req.headers.get_value("content-length")  # "5"
req.body                                 # b"hello"
```

The methods accepted are GET, POST and PUT. A malformed request line, an
invalid header, a non-numeric `Content-Length`, a body longer than
`Content-Length`, or a stream that ends before the request is complete
raises `RequestError`. Without a `Content-Length` header the request is
complete once the blank line after the headers is read.

`Request.parse(data)` can also be fed bytes directly; it returns how many
bytes it consumed, and `Request.state` (a `ParseState`) shows how far it has
got.

### Headers

`Headers` is a dict with lower-case keys.

- `set(key, value)` stores a value, appending to an existing one with `", "`.
- `override(key, value)` replaces it.
- `remove(key)` deletes it if present.
- `get_value(key)` looks it up in any case and returns `None` if missing.
- `parse(data)` takes one header line from the front of `data` and returns
  `(bytes_consumed, finished)`; `(0, False)` means more data is needed and
  `(0, True)` means `data` starts with the blank line that ends the headers.
  A malformed line raises `HeaderError`.

### Writing responses

`Writer` wraps any object with a `write` method. Calls must come in order:
`write_status_line`, then `write_headers`, then `write_body`. A call out of
order raises `WriterStateError`.

`get_default_headers(content_length)` returns headers with
`Content-Length`, `Connection: close` and `Content-Type: text/plain`.
`status_line(status_code)` returns the encoded status line; `StatusCode`
has `OK`, `BAD_REQUEST` and `INTERNAL_SERVER_ERROR`.

## What it does not do

- Each connection carries exactly one request; there is no keep-alive.
- Request bodies are read only by `Content-Length`; chunked transfer
  encoding is not supported.
- Only GET, POST and PUT requests are accepted.
- There is no routing, static file serving or TLS; the handler writes every
  response itself.

## Running the tests

```
pip install .[test]
pytest
```