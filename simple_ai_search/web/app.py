from typing import Optional

from fastapi import FastAPI, Form
from fastapi.responses import HTMLResponse

from ..core.logging import get_logger, setup_logging
from ..search.SearchManager import SearchManager, get_search_manager
from . import render

logger = get_logger(__name__)


def create_app(manager: Optional[SearchManager] = None) -> FastAPI:
    setup_logging()
    app = FastAPI(title="Simple AI Search")

    def _manager() -> SearchManager:
        return manager or get_search_manager()

    @app.get("/search", response_class=HTMLResponse)
    async def search_form() -> HTMLResponse:
        return HTMLResponse(render.render_search_page())

    @app.post("/search", response_class=HTMLResponse)
    async def search_submit(search: str = Form("")) -> HTMLResponse:
        query = search.strip()
        if not query:
            return HTMLResponse(
                render.render_search_page(error="Search field is required."),
                status_code=422,
            )

        outcome = await _manager().run_search_and_summarize(query)
        return HTMLResponse(render.render_search_page(query, outcome))

    @app.get("/admin/indexes", response_class=HTMLResponse)
    async def list_indexes() -> HTMLResponse:
        return HTMLResponse(render.render_index_table(_manager().get_available_indexes()))

    return app


app = create_app()
