from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from cyclestore.core.errors import register_error_handlers
from cyclestore.core.logging_config import configure_logging
from cyclestore.core.settings import Settings, settings as default_settings
from cyclestore.routers.auth import router as auth_router
from cyclestore.routers.blog import router as blog_router
from cyclestore.routers.products import router as products_router
from cyclestore.routers.users import router as users_router
from cyclestore.startup import lifespan


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_error_handlers(app)

    prefix = settings.api_prefix
    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(products_router, prefix=f"{prefix}/products", tags=["products"])
    app.include_router(blog_router, prefix=f"{prefix}/blog", tags=["blog"])
    app.include_router(users_router, prefix=f"{prefix}/users", tags=["users"])

    @app.get(f"{prefix}/health")
    def health_check(request: Request):
        return {
            "status": "ok",
            "message": f"{settings.app_name} funcionando correctamente",
            "database": request.app.state.database.is_reachable(),
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    return app


app = create_app()
