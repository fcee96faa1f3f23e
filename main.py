import os

import uvicorn


def main() -> None:
    reload_enabled = os.getenv("APP_ENV", "development").lower() != "production"
    uvicorn.run(
        "linkgateway.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8080")),
        reload=reload_enabled,
        log_config=None,
    )


if __name__ == "__main__":
    main()
