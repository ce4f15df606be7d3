"""Part Compatibility MCP Server - score substitute parts against an original."""

import logging
from typing import Any

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from starlette.responses import JSONResponse
from starlette.routing import Route

from . import __version__
from .compatibility import build_compatibility_response, describe_metadata
from .config import HTTP_PORT, LOG_LEVEL
from .metadata import SimilarityProfile
from .registry import lookup_metadata, registered_types

logger = logging.getLogger(__name__)


mcp = FastMCP(
    name="partcompat",
    instructions=(
        "Electronic part substitution checks. Use list_component_types to see supported "
        "types, get_component_type for the specs each type compares, and "
        "check_compatibility to score a candidate part against an original."
    ),
)

_READ_ONLY = dict(
    readOnlyHint=True,
    destructiveHint=False,
    idempotentHint=True,
    openWorldHint=False,
)


# Tools

@mcp.tool(annotations=ToolAnnotations(title="Check Part Compatibility", **_READ_ONLY))
async def check_compatibility(
    component_type: str,
    original_specs: dict[str, Any],
    candidate_specs: dict[str, Any],
    profile: str | None = None,
) -> dict:
    """Score how well a candidate part can substitute for an original.

    Args:
        component_type: Component type key (e.g., "resistor", "capacitor", "mosfet").
                        Manufacturer-specific keys fall back to the base type
                        ("resistor_chip_yageo" -> "resistor").
        original_specs: Specs of the part being replaced, e.g.
                        {"resistance": "10kΩ", "tolerance": "1%", "package": "0603"}
        candidate_specs: Specs of the proposed substitute, same format
        profile: Scoring context for the threshold verdict: "design_phase", "replacement",
                 "cost_optimization", "performance_upgrade", "emergency_sourcing".
                 Default: the component type's default profile.

    Returns:
        score (0-1), acceptable (score >= 0.7), vetoed_by (critical specs that failed),
        per-spec breakdown, specs_missing, specs_ignored, profile verdict and summary.
        A critical spec mismatch forces score 0.0.
    """
    return build_compatibility_response(component_type, original_specs, candidate_specs, profile)


@mcp.tool(annotations=ToolAnnotations(title="List Component Types", **_READ_ONLY))
async def list_component_types() -> dict:
    """List component types with compatibility rules, and available scoring profiles."""
    return {
        "component_types": registered_types(),
        "profiles": [
            {
                "name": p.key,
                "description": p.description,
                "minimum_score": p.minimum_score,
            }
            for p in SimilarityProfile
        ],
    }


@mcp.tool(annotations=ToolAnnotations(title="Get Component Type Rules", **_READ_ONLY))
async def get_component_type(component_type: str) -> dict:
    """Get the specs compared for a component type, their importance and tolerance rules.

    Args:
        component_type: Component type key (e.g., "capacitor")
    """
    metadata = lookup_metadata(component_type)
    if metadata is None:
        return {
            "error": f"Unknown component type: {component_type}",
            "supported_types": registered_types(),
        }
    return describe_metadata(metadata)


@mcp.tool(annotations=ToolAnnotations(title="Server Version", **_READ_ONLY))
async def get_version() -> dict:
    """Get server version and health status."""
    return {
        "service": "partcompat-mcp",
        "version": __version__,
        "status": "healthy",
    }


# Health check endpoint
async def health(request):
    return JSONResponse({
        "status": "healthy",
        "service": "partcompat-mcp",
        "version": __version__,
    })


def create_app():
    """Create the ASGI application."""
    app = mcp.http_app(
        path="/mcp",
        transport="streamable-http",
        stateless_http=True,
    )
    app.routes.append(Route("/health", health))
    return app


app = create_app()


def main():
    """Run the server."""
    import uvicorn
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info(f"Starting partcompat-mcp {__version__} with {len(registered_types())} component types")
    uvicorn.run(
        "partcompat_mcp.server:app",
        host="0.0.0.0",
        port=HTTP_PORT,
        lifespan="on",
    )


if __name__ == "__main__":
    main()
