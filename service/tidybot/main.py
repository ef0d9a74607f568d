import html
import json
from typing import Optional

from fastapi import BackgroundTasks, Depends, FastAPI, Header, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from tidybot import __version__
from tidybot.config import Settings, get_settings
from tidybot.telegram_bot import (
    TelegramAPI,
    close_telegram_api,
    execute_action,
    get_telegram_api,
    handle_update,
)
from tidybot.telegram_bot.errors import AuthenticationError, MalformedInputError
from tidybot.telegram_bot.logging_config import bot_logger as logger

app = FastAPI(
    title="Tidybot",
    description="Deletes join/leave service messages in Telegram groups",
    version=__version__
)


# Lifecycle events
@app.on_event("startup")
async def startup_event():
    settings = get_settings()
    logger.setLevel(settings.log_level.upper())
    logger.info(
        f"Starting Tidybot ({settings.environment}), "
        f"owner check {'enabled' if settings.owner_check_enabled else 'disabled'}"
    )


@app.on_event("shutdown")
async def shutdown_event():
    await close_telegram_api()
    logger.info("Bot API client closed")


@app.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """Health check endpoint."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "version": __version__
    }


# Telegram webhook endpoint
@app.post("/", response_class=PlainTextResponse)
async def telegram_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    x_telegram_bot_api_secret_token: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    api: TelegramAPI = Depends(get_telegram_api),
):
    """
    Webhook endpoint for Telegram updates.

    Always answers 200 once the update is authenticated and well-formed;
    Telegram redelivers anything else. The resulting Bot API call runs
    after the response has been sent.
    """
    try:
        action = handle_update(x_telegram_bot_api_secret_token, await request.body(), settings)
    except AuthenticationError:
        logger.warning(f"Rejected webhook call from {request.client.host if request.client else 'unknown'}")
        return PlainTextResponse("Unauthorized", status_code=403)
    except MalformedInputError as e:
        logger.error(f"Error processing webhook: {e}", exc_info=True)
        return PlainTextResponse("Error processing update", status_code=500)

    if action is not None:
        background_tasks.add_task(execute_action, action, api, settings)

    return "OK"


@app.get("/setup", response_class=HTMLResponse)
async def setup_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    api: TelegramAPI = Depends(get_telegram_api),
):
    """Register this service's root URL as the bot's webhook."""
    if settings.public_base_url:
        webhook_url = settings.public_base_url.rstrip("/") + "/"
    else:
        webhook_url = f"{request.url.scheme}://{request.url.hostname}/"

    result = await api.set_webhook(webhook_url, settings.telegram_webhook_secret)
    if result is None:
        return PlainTextResponse("Setup failed: could not reach Telegram", status_code=500)

    logger.info(f"setWebhook {webhook_url}: {result}")
    pretty = html.escape(json.dumps(result, indent=2, ensure_ascii=False))
    return HTMLResponse(f"Webhook setup result:\n<pre>{pretty}</pre>")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
