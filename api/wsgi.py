import uvicorn

from api.config import settings
from api.main import create_app

app = create_app()

if __name__ == "__main__":
    uvicorn.run("api.wsgi:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
