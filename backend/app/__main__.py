# backend/app/__main__.py

"""
`python -m app` で uvicorn を起動する。

- PORT            (デフォルト: 8080)
- WEB_CONCURRENCY (ワーカープロセス数, デフォルト: 2)
"""

import uvicorn
from dotenv import load_dotenv

from app.utils.config import get_env, get_env_int


def main() -> None:
    load_dotenv()

    uvicorn.run(
        "app.main:app",
        host=get_env("HOST", default="0.0.0.0", required=False),
        port=get_env_int("PORT", 8080),
        workers=get_env_int("WEB_CONCURRENCY", 2),
    )


if __name__ == "__main__":
    main()
