"""Main entry point for the workflow simulator service."""

from flowsim.config import load_config
from flowsim.factory import create_app

config = load_config()
app = create_app(config)


def run():
    """Run the service with uvicorn."""
    import uvicorn
    uvicorn.run("flowsim.main:app", **config.get_uvicorn_config())


if __name__ == "__main__":
    run()
