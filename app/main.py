from fastapi import FastAPI
from app.api.endpoints import auth
from app.api.endpoints import materials
from app.api.endpoints import requisitions
from app.api.endpoints import roles
from app.api.endpoints import users


from fastapi.middleware.cors import CORSMiddleware
from app.core.config import get_settings
from app.core.errors import register_exception_handlers
from app.core.logging_config import configure_logging

settings = get_settings()
configure_logging(settings)

app = FastAPI(title="Requisition API", version="1.0.0")

origins = settings.cors_origins_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    # Browsers refuse credentials together with a wildcard origin.
    allow_credentials="*" not in origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app, settings)

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(materials.router, prefix="/api/materials", tags=["materials"])
app.include_router(requisitions.router, prefix="/api/requisitions", tags=["requisitions"])
app.include_router(roles.router, prefix="/api/roles", tags=["roles"])
app.include_router(users.router, prefix="/api/users", tags=["users"])


@app.get("/api/health", tags=["health"])
def health():
    return {"ok": True}
