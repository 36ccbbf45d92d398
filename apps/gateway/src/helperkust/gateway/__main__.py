"""python -m helperkust.gateway"""

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "helperkust.gateway.main:app",
        host=os.environ.get("HELPERKUST_HOST", "127.0.0.1"),
        port=int(os.environ.get("HELPERKUST_PORT", "8000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
