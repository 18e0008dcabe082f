"""uvicorn 启动入口 -- python -m eventboard.gateway

EVENTBOARD_HOST / EVENTBOARD_PORT 控制监听地址（默认 0.0.0.0:5000）。
"""

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "eventboard.gateway.main:app",
        host=os.environ.get("EVENTBOARD_HOST", "0.0.0.0"),
        port=int(os.environ.get("EVENTBOARD_PORT", "5000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
