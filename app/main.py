import logging

from fastapi import FastAPI

from app.api.v1.admin import router as admin_router
from app.api.v1.bookings import router as bookings_router
from app.api.v1.contact import router as contact_router
from app.api.v1.portal import router as portal_router
from app.api.v1.quotes import router as quotes_router
from app.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("workflow_id", "kind", "record_id", "status", "course_id", "session_id", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title=f"{settings.BUSINESS_NAME} Client Services", version="1.0.0")

app.include_router(quotes_router, prefix="/api/v1/quotes", tags=["quotes"])
app.include_router(bookings_router, prefix="/api/v1/bookings", tags=["bookings"])
app.include_router(contact_router, prefix="/api/v1/contact", tags=["contact"])
app.include_router(portal_router, prefix="/api/v1/portal", tags=["portal"])
app.include_router(admin_router, prefix="/api/v1/admin", tags=["admin"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
