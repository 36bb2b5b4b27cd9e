"""
Content-negotiated responses.

The same payload is rendered as JSON for API clients, plain text for curl and an
HTML page for browsers. The HTML template autoescapes every value.
"""
from __future__ import annotations

import json
from typing import Any

from flask import jsonify, make_response, render_template, request

JSON = "json"
CURL = "curl"
BROWSER = "browser"

_BROWSER_AGENTS = ("mozilla", "chrome", "safari")


def detect_client_type() -> str:
    accept = request.headers.get("Accept", "")
    user_agent = request.headers.get("User-Agent", "").lower()

    # Explicit Accept wins over User-Agent sniffing
    if "application/json" in accept:
        return JSON
    if "text/html" in accept:
        return BROWSER
    if "curl" in user_agent:
        return CURL
    if any(agent in user_agent for agent in _BROWSER_AGENTS):
        return BROWSER
    return JSON


def format_response(data: Any, status: int = 200):
    client = detect_client_type()
    if client == CURL:
        response = make_response(format_plaintext(data), status)
        response.mimetype = "text/plain"
        return response
    if client == BROWSER:
        return make_response(render_template("response.html", **html_context(data)), status)
    return make_response(jsonify(data), status)


def _scalar(value: Any) -> str:
    if isinstance(value, bool) or value is None:
        return json.dumps(value)
    return str(value)


def _pretty(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2)
    return _scalar(value)


def _compact(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return _scalar(value)


def _extra_items(data: dict):
    return [(k, v) for k, v in data.items() if k not in ("success", "message")]


def format_plaintext(data: Any) -> str:
    if isinstance(data, str):
        return data

    if isinstance(data, dict) and data.get("error"):
        output = f"ERROR: {data['error']}\n"
        if data.get("message"):
            output += f"\n{data['message']}\n"
        return output

    if isinstance(data, dict) and data.get("success"):
        output = f"SUCCESS: {data.get('message') or 'Operation completed'}\n"
        extra = _extra_items(data)
        if extra:
            output += "\n"
            for key, value in extra:
                output += f"{key}: {_pretty(value)}\n"
        return output

    if isinstance(data, list):
        if not data:
            return "No items found.\n"
        output = f"Found {len(data)} item(s):\n\n"
        for index, item in enumerate(data, start=1):
            output += f"[{index}] "
            if isinstance(item, dict):
                for key, value in item.items():
                    output += f"{key}={_compact(value)} "
            else:
                output += _compact(item)
            output += "\n"
        return output

    if isinstance(data, dict):
        return "".join(f"{key}: {_pretty(value)}\n" for key, value in data.items())

    return f"{data}\n"


def html_context(data: Any) -> dict:
    """Pre-digest a payload into what templates/response.html renders."""
    if isinstance(data, dict) and data.get("error"):
        return {"kind": "error", "title": "Error", "error": data["error"], "message": data.get("message")}

    if isinstance(data, dict) and data.get("success"):
        rows = [(key, _pretty(value), isinstance(value, (dict, list))) for key, value in _extra_items(data)]
        return {
            "kind": "success",
            "title": "Success",
            "message": data.get("message") or "Operation completed",
            "rows": rows,
        }

    if isinstance(data, list):
        if not data:
            return {"kind": "list", "title": "Items", "columns": [], "items": []}
        columns = list(data[0].keys()) if isinstance(data[0], dict) else ["value"]
        items = [
            [_compact(item.get(col)) for col in columns] if isinstance(item, dict) else [_compact(item)]
            for item in data
        ]
        return {"kind": "list", "title": f"Items ({len(data)})", "columns": columns, "items": items}

    if isinstance(data, dict):
        rows = [(key, _pretty(value), isinstance(value, (dict, list))) for key, value in data.items()]
        return {"kind": "object", "title": "Details", "rows": rows}

    return {"kind": "text", "title": "Response", "text": str(data)}
