# dashboard/main.py

import logging

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from dashboard.api.auth import router as auth_router
from dashboard.api.customers import router as customers_router
from dashboard.api.deps import NotAuthenticated
from dashboard.api.invoices import router as invoices_router
from dashboard.api.overview import router as overview_router
from dashboard.config import get_settings

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(message)s",
)

app = FastAPI(
    title="Invoices Dashboard",
    version="0.1.0",
)


@app.exception_handler(NotAuthenticated)
async def redirect_to_login(request: Request, exc: NotAuthenticated):
    return RedirectResponse("/login", status_code=303)


@app.get("/health")
def health_check():
    return {"status": "ok"}

app.include_router(auth_router)
app.include_router(overview_router)
app.include_router(customers_router)
app.include_router(invoices_router)
