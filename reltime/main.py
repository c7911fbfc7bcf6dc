import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request

from reltime.core.config import get_settings
from reltime.core.errors import InvalidDateError
from reltime.core.options import FormatterOptions
from reltime.middlewares.http import RelativeTimeMiddleware, accept_language
from reltime.services.formatter import RelativeTimeFormatter

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

formatter = RelativeTimeFormatter(FormatterOptions.from_settings(settings))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager

    Handles startup and shutdown events
    """
    logger.info(f"Starting reltime (default locale: {formatter.default_locale}, options: {formatter.options})")

    yield

    logger.info(f"Shutting down, cached locales: {sorted(formatter.formatters)}")


# Create FastAPI app
app = FastAPI(
    title="reltime",
    description="Localized relative time formatting",
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    RelativeTimeMiddleware,
    formatter=formatter,
    request_prop=settings.REQUEST_PROP,
    locale_prop=settings.LOCALE_PROP,
)


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": "reltime",
        "version": "0.1.0"
    }


def _parse_ts(ts: str):
    """Digits-only values are epoch milliseconds, anything else a date string"""
    return int(ts) if ts.lstrip("-").isdigit() else ts


@app.get("/relative")
def relative(request: Request, ts: str, lang: Optional[str] = None):
    """
    Format a date relative to now using the request's language

    Args:
        ts: Epoch milliseconds or a date string
        lang: Language tag; defaults to the Accept-Language header
    """
    if lang:
        setattr(request.state, settings.LOCALE_PROP, lang)

    try:
        text = getattr(request.state, settings.REQUEST_PROP)(_parse_ts(ts))
    except InvalidDateError as e:
        logger.warning(f"Rejected date {ts!r}: {e.reason}")
        raise HTTPException(status_code=400, detail=str(e))

    return {"text": text}


@app.get("/relative/detail")
def relative_detail(request: Request, ts: str, lang: Optional[str] = None):
    """Like /relative, also reporting the unit, value and locale used"""
    locale = lang or accept_language(request)

    try:
        result = formatter.format_detailed(_parse_ts(ts), locale)
    except InvalidDateError as e:
        logger.warning(f"Rejected date {ts!r}: {e.reason}")
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "text": result.text,
        "locale": result.locale,
        "unit": result.unit,
        "value": result.value,
        "fallback_used": result.fallback_used,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "reltime.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
