from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from codelens.api.dto import HealthResponse
from codelens.api.routes import languages, reviews
from codelens.logging_config import configure_logging
from codelens.settings import settings

configure_logging()

app = FastAPI(title="CodeLens Review API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reviews.router)
app.include_router(languages.router)


@app.get("/health")
def health() -> HealthResponse:
    return HealthResponse(ok=True, app_name=settings.app_name, app_env=settings.app_env)
