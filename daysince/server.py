from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Callable, Dict, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
import yaml

from common.logging_setup import get_logger
from common.types import RenderParams
from common.utils import timer_ms, utc_now
from daysince.compositor import render
from daysince.errors import RenderError
from daysince.resolver import match_target, resolve_label


log = get_logger(__name__)

DEFAULTS: Dict = {
    "render": {
        "source_image": "assets/images/src/base.png",
        "font_file": "assets/fonts/SourceCodePro-Regular.ttf",
        "font_size": 144,
        "y_offset": 345,
        "fill": [255, 255, 255, 255],
    },
    "server": {"default_port": 8080},
}


def _load_config(path: Optional[str] = None) -> Dict:
    path = path or os.environ.get("DAYSINCE_CONFIG", "config/params.yaml")
    cfg = {k: dict(v) for k, v in DEFAULTS.items()}
    if not Path(path).exists():
        return cfg
    with open(path, "r") as f:
        loaded = yaml.safe_load(f) or {}
    for section, values in loaded.items():
        cfg.setdefault(section, {}).update(values or {})
    return cfg


def _file_status(path: Path) -> Dict:
    return {"path": str(path), "exists": path.is_file()}


def create_app(cfg: Optional[Dict] = None, clock: Callable = utc_now) -> FastAPI:
    cfg = cfg or _load_config()
    params = RenderParams.from_config(cfg["render"])
    timed_render = timer_ms(render)

    app = FastAPI(title="Day-count Image API", version="1.0.0")
    app.state.params = params
    app.state.clock = clock

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        t0 = time.perf_counter()
        response = await call_next(request)
        log.info(
            f'{request.method} {request.url.path} {response.status_code}',
            extra={"extra": {
                "remote": request.client.host if request.client else None,
                "method": request.method,
                "path": request.url.path,
                "query": request.url.query,
                "status": response.status_code,
                "size": response.headers.get("content-length"),
                "referer": request.headers.get("referer"),
                "user_agent": request.headers.get("user-agent"),
                "elapsed_ms": round((time.perf_counter() - t0) * 1e3, 2),
            }},
        )
        return response

    @app.get("/health")
    def health():
        p: RenderParams = app.state.params
        return {
            "status": "ok",
            "source_image": _file_status(p.source_image),
            "font_file": _file_status(p.font_file),
        }

    @app.get("/{target}")
    def day_image(target: str, w: Optional[int] = Query(None, ge=1)):
        """
        Return the source PNG with the day-count label drawn on it.

        `target` is `NNNN[.png]` (label drawn verbatim) or `YYYY-MM-DD[.png]`
        (days elapsed since that date). `w` downsizes to that width.
        """
        req = match_target(target)
        if req is None:
            raise HTTPException(status_code=404, detail="not_found")

        label = resolve_label(req, now=app.state.clock())
        try:
            result, dt_ms = timed_render(label.text, app.state.params, w)
        except RenderError as e:
            log.error(
                "render failed",
                exc_info=True,
                extra={"extra": {"label": label.text, "path": str(e.path) if e.path else None}},
            )
            return PlainTextResponse("failed to render image", status_code=500)

        log.debug("rendered", extra={"extra": {**result.to_meta(), "label": label.text, "ms": round(dt_ms, 2)}})
        headers = {
            "Content-Length": str(len(result.png)),
            "X-Day-Count-Label": label.text,
            "X-Overlay": "drawn" if result.overlay_drawn else "skipped",
            # date labels move with the clock
            "Cache-Control": "no-store" if req.kind == "date" else "public, max-age=60",
        }
        return Response(content=result.png, media_type="image/png", headers=headers)

    return app


P = _load_config()
app = create_app(P)


def main() -> None:
    port = int(os.environ.get("PORT") or P["server"].get("default_port", 8080))
    log.info(f"Listening on http://0.0.0.0:{port}...")
    uvicorn.run(app, host="0.0.0.0", port=port, access_log=False, log_config=None)


# -------- local dev entrypoint --------
if __name__ == "__main__":
    main()
