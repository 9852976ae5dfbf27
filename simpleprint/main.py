"""
SimplePrint Main module - CLI and HTTP API
"""

import json
import logging
import time
from typing import Any, Callable, List, Optional

import typer
import uvicorn
from fastapi import FastAPI, HTTPException, status
from fastapi.routing import APIRouter
from pydantic import BaseModel, Field

from simpleprint.features import Feature, FeatureRegistry, OperationResult
from simpleprint.version import get_version

# Module-level logger
logger = logging.getLogger("simpleprint.main")


# Create CLI app with Typer
app = typer.Typer(
    name="simpleprint",
    help="SimplePrint - render {}-templates and inspect printf-style specifiers",
    add_completion=False,
)

# Create FastAPI app for API server
api_app = FastAPI(
    title="SimplePrint API",
    description="API for SimplePrint template rendering",
    version=get_version(),
)

# API router for versioned endpoints
api_router = APIRouter(prefix="/api/v1")


# Request/response models
class RenderRequest(BaseModel):
    template: str
    values: List[Any] = Field(default_factory=list)


class RenderResponse(BaseModel):
    text: str


class SpecRequest(BaseModel):
    specifier: str


# ----------------- Logging -----------------


class ElapsedMsFormatter(logging.Formatter):
    """Formatter that shows milliseconds since program start, right-aligned."""

    def __init__(self, fmt=None, datefmt=None, *args, **kwargs):
        super().__init__(fmt, datefmt, *args, **kwargs)
        self.start_time = time.monotonic()
        self.width = 8

    def format(self, record):
        elapsed_ms = int((time.monotonic() - self.start_time) * 1000)
        if elapsed_ms < 10**7:
            elapsed = f"[{elapsed_ms:>{self.width}}ms]"
        else:
            elapsed = f"[{elapsed_ms}ms]"
        record.elapsed = elapsed
        return super().format(record)


VERBOSE_LEVEL = 15  # Between INFO (20) and DEBUG (10)
logging.addLevelName(VERBOSE_LEVEL, "VERBOSE")


def setup_logging(debug: bool = False, verbose: bool = False) -> None:
    """Set up logging configuration"""
    if debug:
        log_level = logging.DEBUG
    elif verbose:
        log_level = VERBOSE_LEVEL
    else:
        log_level = logging.INFO
    handler = logging.StreamHandler()
    handler.setFormatter(ElapsedMsFormatter("%(elapsed)s %(message)s"))
    root = logging.getLogger()
    root.handlers = []  # Remove any existing handlers
    root.addHandler(handler)
    root.setLevel(log_level)
    logging.getLogger("uvicorn.access").setLevel(
        logging.DEBUG if debug else logging.WARNING
    )


# ----------------- Helper Functions -----------------


def _feature_or_exit(feature_name: str) -> Feature:
    feature = FeatureRegistry.get_feature(feature_name)
    if feature is None:
        logger.error("Unknown feature: %s", feature_name)
        raise typer.Exit(code=1)
    return feature


def _handle_cli_result(feature_name: str, result: OperationResult) -> Any:
    if not result.success:
        logger.error("%s failed: %s", feature_name, result.error or "Unknown error")
        raise typer.Exit(code=1)
    return result.data


def _cli_help(feature_name: str, option: str) -> Optional[str]:
    """Help text declared for a CLI option in the feature's metadata"""
    feature = FeatureRegistry.get_feature(feature_name)
    if feature is None or not feature.cli_options:
        return None
    return feature.cli_options.get(option, {}).get("help")


def _feature_or_404(feature_name: str) -> Feature:
    feature = FeatureRegistry.get_feature(feature_name)
    if not feature:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{feature_name} feature not found",
        )
    return feature


def _api_result(result: OperationResult) -> Any:
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.error or "An error occurred",
        )
    return result.data


# ----------------- CLI Commands -----------------


@app.command()
def version() -> None:
    """Show the SimplePrint version"""
    setup_logging(False)
    data = _handle_cli_result("version", _feature_or_exit("version").handler())
    typer.echo(f"SimplePrint version: {data['version']}")


@app.command()
def render(
    template: str = typer.Argument(..., help=_cli_help("render", "template")),
    values: Optional[List[str]] = typer.Argument(
        None, help=_cli_help("render", "values")
    ),
    typed: bool = typer.Option(
        False,
        "--typed",
        help=_cli_help("render", "typed"),
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
) -> None:
    """Render a template and print the result"""
    setup_logging(debug, verbose)
    feature = _feature_or_exit("render")
    data = _handle_cli_result(
        "render", feature.handler(template=template, values=values or [], typed=typed)
    )
    typer.echo(data["text"])


@app.command()
def spec(
    specifier: str = typer.Argument(..., help=_cli_help("spec", "specifier")),
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode"),
) -> None:
    """Parse a printf-style specifier and print it as JSON"""
    setup_logging(debug)
    feature = _feature_or_exit("spec")
    data = _handle_cli_result("spec", feature.handler(specifier=specifier))
    typer.echo(json.dumps(data, indent=2))


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind the API server"),
    port: int = typer.Option(8000, help="Port to bind the API server"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode"),
):
    """Start the SimplePrint API server"""
    setup_logging(debug)

    logger.info(
        f"Starting SimplePrint API server version {get_version()} on {host}:{port}"
    )
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(api_app, host=host, port=port)


# ----------------- API Endpoints -----------------


async def get_version_endpoint():
    """Get SimplePrint version"""
    return _api_result(_feature_or_404("version").handler())


async def render_endpoint(request: RenderRequest):
    """Render a template with JSON values"""
    feature = _feature_or_404("render")
    return _api_result(
        feature.handler(template=request.template, values=request.values)
    )


async def spec_endpoint(request: SpecRequest):
    """Parse a placeholder specifier"""
    return _api_result(_feature_or_404("spec").handler(specifier=request.specifier))


def _mount_feature(feature_name: str, endpoint: Callable, **route_kwargs) -> None:
    """Add a route at the path and methods the feature declares"""
    feature = FeatureRegistry.get_feature(feature_name)
    if feature is None or not feature.api_endpoint:
        logger.debug("Feature %s has no API endpoint", feature_name)
        return
    options = dict(feature.api_endpoint)
    api_router.add_api_route(
        options.pop("path"),
        endpoint,
        methods=options.pop("methods"),
        summary=feature.description,
        **options,
        **route_kwargs,
    )


_mount_feature("version", get_version_endpoint)
_mount_feature("render", render_endpoint, response_model=RenderResponse)
_mount_feature("spec", spec_endpoint)

# Include the router in the FastAPI app
api_app.include_router(api_router)


if __name__ == "__main__":
    app()
