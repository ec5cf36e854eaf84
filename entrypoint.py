"""Launch the Learnfolio API with uvicorn; port and host come from the environment."""
import os

import uvicorn

from learnfolio.main import app


def main() -> None:
    port = int(os.environ.get("LEARNFOLIO_PORT", "8001"))
    host = os.environ.get("LEARNFOLIO_HOST", "127.0.0.1")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
