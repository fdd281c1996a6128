from __future__ import annotations

import gzip
import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Iterator, List
from urllib.parse import parse_qs, urlsplit

import pytest

from percolator import Client

# Stored percolator queries of the fake node: query id -> term that must appear in the document.
REGISTERED_QUERIES = {"q-hello": "hello", "q-world": "world"}
STORED_DOCUMENTS = {("tweets", "tweet", "1"): {"message": "hello there"}}


def _matches(document: Dict[str, Any]) -> List[str]:
    text = json.dumps(document)
    return [query_id for query_id, term in REGISTERED_QUERIES.items() if term in text]


class FakeSearchNode(ThreadingHTTPServer):
    received: List[Dict[str, Any]]


class Handler(BaseHTTPRequestHandler):
    server: FakeSearchNode

    def _send_json(self, status: int, payload: Dict[str, Any], headers: Dict[str, str] = None) -> None:
        data = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        for key, value in (headers or {}).items():
            self.send_header(key, value)
        self.end_headers()
        self.wfile.write(data)

    def _read_body(self) -> Dict[str, Any]:
        length = int(self.headers.get("Content-Length") or 0)
        raw = self.rfile.read(length) if length else b""
        if self.headers.get("Content-Encoding") == "gzip":
            raw = gzip.decompress(raw)
        return json.loads(raw) if raw else {}

    def _handle(self) -> None:
        url = urlsplit(self.path)
        query = {key: values[-1] for key, values in parse_qs(url.query).items()}
        body = self._read_body()
        self.server.received.append(
            {"method": self.command, "path": url.path, "query": query, "body": body, "headers": dict(self.headers)}
        )

        if url.path.startswith("/slow"):
            time.sleep(0.2)
            self._send_json(200, {})
            return

        segments = url.path.strip("/").split("/")
        if not segments or segments[-1] != "_percolate":
            self._send_json(400, {"error": "unsupported path"})
            return
        index, doc_type = segments[0], segments[1]
        if index == "missing":
            self._send_json(404, {"error": {"type": "index_not_found_exception"}, "status": 404})
            return

        if len(segments) == 4:
            document = STORED_DOCUMENTS.get((index, doc_type, segments[2]))
            if document is None:
                self._send_json(404, {"error": {"type": "document_missing_exception"}, "status": 404})
                return
        else:
            document = body.get("doc", {})

        matches = _matches(document)
        if query.get("percolate_format") == "ids":
            payload = {"total": len(matches), "matches": matches}
        else:
            payload = {"total": len(matches), "matches": [{"_index": index, "_id": m} for m in matches]}
        extra = {"Warning": '299 Search "[percolate] api is deprecated"'} if query.get("pretty") else None
        self._send_json(200, payload, extra)

    def do_GET(self) -> None:  # noqa: N802
        self._handle()

    def do_POST(self) -> None:  # noqa: N802
        self._handle()

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A003
        return


@pytest.fixture
def search_node() -> Iterator[FakeSearchNode]:
    server = FakeSearchNode(("127.0.0.1", 0), Handler)
    server.received = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=1)


@pytest.fixture
def search_url(search_node: FakeSearchNode) -> str:
    host, port = search_node.server_address[:2]
    return f"http://{host}:{port}"


@pytest.fixture
def client(search_url: str) -> Client:
    return Client(search_url, max_retries=0)
