import uvicorn

from dev_profiles.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "dev_profiles.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
