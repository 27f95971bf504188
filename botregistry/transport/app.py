"""
Robot Registry Application

FastAPI application exposing the robot registry over HTTP.
This is the main entry point for running the server:

    uvicorn botregistry.transport.app:app --port 7978

or `python -m botregistry`, which also accepts command-line flags.

Endpoints:
- /update: called by robots with name, user, x and y query parameters
- /text: all robot info as human-readable text
- /json: all robot info as JSON
- /hosts: legacy support, robot name and IP per line
- /hostsjson: legacy support, JSON object of robot name to IP
- /hostsalivejson: legacy support, same as /hostsjson for alive robots
- /health: registry counters

Configuration is read from environment variables (see botregistry.config),
which can be loaded from a .env file in the project root.
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse

# Load environment variables from .env file
load_dotenv()

from botregistry import __version__
from botregistry.config import Settings, settings_from_env
from botregistry.registry import RobotRegistry
from botregistry.storage import RobotStore, create_store

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


router = APIRouter()


def get_registry(request: Request) -> RobotRegistry:
    """Registry created by the application lifespan."""
    return request.app.state.registry


@router.get("/update", response_class=PlainTextResponse)
async def update(
    request: Request,
    name: str = "",
    user: str = "",
    x: str = "",
    y: str = "",
    registry: RobotRegistry = Depends(get_registry),
):
    """
    Record a report from a robot.

    The robot's address is taken from the connection, not the query.
    Every report is followed by a save of the whole registry.
    """
    address = request.client.host if request.client else ""
    logger.debug(f"IP of request: {address}")

    _, created = await registry.upsert(name, user, address, x, y)
    await registry.save()

    return f"Added {name}" if created else f"updated {name}"


@router.get("/json")
async def json_full(registry: RobotRegistry = Depends(get_registry)):
    """All robot info as JSON."""
    return await registry.all_as_json()


@router.get("/text", response_class=PlainTextResponse)
async def text_full(registry: RobotRegistry = Depends(get_registry)):
    """All robot info as text."""
    return await registry.all_as_text()


@router.get("/hosts", response_class=PlainTextResponse)
async def hosts(registry: RobotRegistry = Depends(get_registry)):
    return await registry.hosts_text()


@router.get("/hostsjson")
async def hosts_json(registry: RobotRegistry = Depends(get_registry)):
    return await registry.name_to_address_map()


@router.get("/hostsalivejson")
async def hosts_alive_json(registry: RobotRegistry = Depends(get_registry)):
    return await registry.alive_name_to_address_map()


@router.get("/health")
async def health_check(registry: RobotRegistry = Depends(get_registry)):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "robots": registry.robot_count,
        "alive": registry.alive_count,
    }


def create_app(
    settings: Settings | None = None,
    store: RobotStore | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Server configuration (None = read from environment at startup)
        store: Storage adapter overriding the configured one

    Returns:
        FastAPI application whose lifespan owns the registry
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.

        Loads the registry from storage on startup and flushes it on shutdown.
        """
        config = settings or settings_from_env()
        if config.debug:
            logging.getLogger("botregistry").setLevel(logging.DEBUG)

        # Startup
        logger.info("Starting robot registry...")

        robot_store = store or create_store(config.storage)
        logger.info(f"Storage initialized: {type(robot_store).__name__}")

        registry = RobotRegistry(
            store=robot_store,
            alive_timeout_seconds=config.alive_timeout_seconds,
            refresh_alive=config.refresh_alive,
            autosave_interval_seconds=config.autosave_interval_seconds,
        )
        await registry.load()
        await registry.start()
        app.state.registry = registry

        logger.info("Robot registry started")

        yield

        # Shutdown
        logger.info("Shutting down robot registry...")
        await registry.stop()
        await robot_store.close()
        logger.info("Robot registry stopped")

    app = FastAPI(
        title="Robot Registry",
        description="Tracks the latest reported state of networked robots",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(router)
    return app


app = create_app()
