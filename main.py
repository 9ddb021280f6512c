import uvicorn
from src.app import app
# importing app puts src/ on sys.path
from config import settings

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=3090,
        reload=settings.DEBUG
    )
