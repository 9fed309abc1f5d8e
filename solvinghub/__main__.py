import uvicorn

from solvinghub.config import Config


def main():
    uvicorn.run(
        "solvinghub.main:app",
        host=Config.HOST,
        port=Config.PORT,
        reload=not Config.IS_PRODUCTION,
        log_config=None,
    )


if __name__ == "__main__":
    main()
