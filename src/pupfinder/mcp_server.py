"""MCP server: exposes the dog list and selection to LLM clients via stdio."""

from __future__ import annotations

import json
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from pupfinder.config import Config
from pupfinder.presentation import about_rows, call_to_action, headline
from pupfinder.sources import PayloadSource, make_source
from pupfinder.state import DogsState


def _make_server(config: Config) -> tuple[Server, DogsState, PayloadSource]:
    source = make_source(config)
    state = DogsState(source)
    server = Server("pupfinder")

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name="list_dogs",
                description="List all adoptable dogs with their id, name and breed.",
                inputSchema={"type": "object", "properties": {}},
            ),
            Tool(
                name="select_dog",
                description=(
                    "Select a dog by id and return its full details, including "
                    "a formatted About section and the adoption page URL."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "id": {"type": "integer", "description": "Dog id"},
                    },
                    "required": ["id"],
                },
            ),
            Tool(
                name="get_selected_dog",
                description="Return the currently selected dog, or null.",
                inputSchema={"type": "object", "properties": {}},
            ),
            Tool(
                name="get_adoption_url",
                description="Return the adoption page URL of the selected dog.",
                inputSchema={"type": "object", "properties": {}},
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        try:
            result = _dispatch(name, arguments, state)
            return [TextContent(type="text", text=json.dumps(result, indent=2))]
        except Exception as exc:
            return [TextContent(type="text", text=json.dumps({"error": str(exc)}))]

    return server, state, source


def _details(dog) -> dict:
    d = dog.to_dict()
    d["headline"] = headline(dog)
    d["about_rows"] = [{"title": t, "text": text} for t, text in about_rows(dog)]
    d["call_to_action"] = call_to_action(dog)
    return d


def _dispatch(name: str, args: dict[str, Any], state: DogsState) -> Any:
    state.load()

    if name == "list_dogs":
        return [
            {"id": d.id, "name": d.name, "breed": d.breed}
            for d in state.dogs.get()
        ]

    elif name == "select_dog":
        dog_id = int(args["id"])
        dog = state.select_dog(dog_id)
        if dog is None:
            return {"error": f"No dog with id {dog_id}"}
        return _details(dog)

    elif name == "get_selected_dog":
        dog = state.selected_dog.get()
        return _details(dog) if dog is not None else None

    elif name == "get_adoption_url":
        dog = state.selected_dog.get()
        return {"url": dog.adoption_url if dog is not None else None}

    else:
        raise ValueError(f"Unknown tool: {name}")


async def run_server(config: Config) -> None:
    """Serve the dog tools over stdio until the client disconnects."""
    server, _, source = _make_server(config)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        source.close()
