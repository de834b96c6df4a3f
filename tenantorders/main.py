"""tenantorders entrypoint."""

import uvicorn


def cli() -> None:
    """CLI entrypoint."""
    uvicorn.run("tenantorders.web.app:create_app", factory=True)


if __name__ == "__main__":
    cli()
