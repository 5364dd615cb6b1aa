"""Permissive request body parsing."""

from fastapi import Request


async def read_json_body(request: Request) -> dict:
    """JSON object body, or {} when the body is empty, malformed or not an object."""
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
