# run.py
import uvicorn

from app.core.config import settings

if __name__ == "__main__":
    print(f"LLM: {settings.LLM_PROVIDER} {settings.LLM_MODEL}")

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )
