"""
Graph Editor Backend - FastAPI Application

This is the entry point the browser editor talks to.
It provides:
- Text parsing (edge list / adjacency matrix) into the session graph
- Stateless analysis of text for live previews
- Node/edge editing, layout and export for the session graph
- CORS configuration for local frontend development
"""
import logging
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from graph_core.analysis import graph_stats
from graph_core.codec import parse_graph, serialize_edge_list, serialize_matrix
from graph_core.errors import GraphError
from graph_core.validation import validate_graph, validation_summary

from .config import Settings, configure_logging
from .models import (
    CreateEdgeRequest,
    CreateNodeRequest,
    GraphTextRequest,
    LayoutRequest,
    UpdateGraphRequest,
)
from .session import GraphSession

logger = logging.getLogger(__name__)


def get_session(request: Request) -> GraphSession:
    return request.app.state.session


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build an app with its own settings and graph session."""
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Graph Editor API",
        description="Backend API for the interactive graph editor",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.session = GraphSession(settings)

    # CORS for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Health Check ---

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    # --- Graph State ---

    @app.get("/api/graph")
    async def get_graph(session: GraphSession = Depends(get_session)):
        """Get the current graph state."""
        return session.get_state()

    @app.patch("/api/graph")
    async def update_graph(request: UpdateGraphRequest, session: GraphSession = Depends(get_session)):
        """Update graph settings (directedness)."""
        if request.directed is not None:
            session.set_directed(request.directed)
        return {"success": True, **session.get_state()}

    @app.post("/api/graph/parse")
    async def parse_text(request: GraphTextRequest, session: GraphSession = Depends(get_session)):
        """Replace the session graph with one parsed from text."""
        try:
            session.load_text(request.text, request.format, request.directed)
        except GraphError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"success": True, **session.get_state()}

    @app.post("/api/graph/analyze")
    async def analyze_text(request: GraphTextRequest):
        """Parse and analyze text without touching the session graph."""
        try:
            graph = parse_graph(
                request.text,
                request.format,
                request.directed,
                width=settings.canvas_width,
                height=settings.canvas_height,
            )
        except GraphError as e:
            raise HTTPException(status_code=400, detail=str(e))

        issues = validate_graph(graph)
        return {
            "success": True,
            "graph": graph.to_json_dict(),
            "text": {
                "edges": serialize_edge_list(graph),
                "matrix": serialize_matrix(graph),
            },
            "stats": graph_stats(graph).to_dict(),
            "issues": [issue.to_dict() for issue in issues],
            "summary": validation_summary(issues),
        }

    @app.post("/api/graph/clear")
    async def clear_graph(session: GraphSession = Depends(get_session)):
        """Remove every node and edge."""
        session.clear()
        return {"success": True, **session.get_state()}

    # --- Node Operations ---

    @app.post("/api/nodes")
    async def create_node(request: CreateNodeRequest, session: GraphSession = Depends(get_session)):
        """Create a new node."""
        try:
            node = session.add_node(request.id, x=request.x, y=request.y)
        except GraphError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"success": True, "node": node.model_dump()}

    @app.delete("/api/nodes/{node_id}")
    async def delete_node(node_id: int, session: GraphSession = Depends(get_session)):
        """Delete a node and its connected edges."""
        if session.delete_node(node_id):
            return {"success": True}
        raise HTTPException(status_code=404, detail="Node not found")

    # --- Edge Operations ---

    @app.post("/api/edges")
    async def create_edge(request: CreateEdgeRequest, session: GraphSession = Depends(get_session)):
        """Create a new edge."""
        try:
            edge = session.add_edge(request.source, request.target, request.weight)
        except GraphError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {
            "success": True,
            "edge": edge.to_json_dict(session.graph.is_directed)
        }

    @app.delete("/api/edges/{edge_id}")
    async def delete_edge(edge_id: str, session: GraphSession = Depends(get_session)):
        """Delete an edge."""
        if session.delete_edge(edge_id):
            return {"success": True}
        raise HTTPException(status_code=404, detail="Edge not found")

    # --- Analysis & Validation ---

    @app.get("/api/graph/stats")
    async def get_stats(session: GraphSession = Depends(get_session)):
        """Structural report for the session graph."""
        return {"success": True, "stats": session.stats()}

    @app.get("/api/graph/validate")
    async def validate_current_graph(session: GraphSession = Depends(get_session)):
        """
        Validate the session graph for structural issues.

        Returns a list of issues (errors, warnings, info) and a summary.
        """
        return {"success": True, **session.validate()}

    # --- Layout ---

    @app.post("/api/layout")
    async def auto_layout(request: LayoutRequest, session: GraphSession = Depends(get_session)):
        """Rearrange nodes. Unknown strategies are rejected by LayoutRequest."""
        if session.auto_layout(strategy=request.strategy):
            return {"success": True, "strategy": request.strategy}
        raise HTTPException(status_code=400, detail="No nodes to layout")

    # --- Export ---

    @app.get("/api/graph/export/{fmt}")
    async def export_graph(fmt: str, session: GraphSession = Depends(get_session)):
        """Download the session graph as text."""
        try:
            content = session.export(fmt)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        media_type = "application/json" if fmt == "json" else "text/plain"
        return PlainTextResponse(content, media_type=media_type)

    logger.info("Graph editor app created")
    return app


def main():
    """Run the backend with uvicorn."""
    import uvicorn

    settings = Settings.from_env()
    configure_logging(settings)
    uvicorn.run(
        "graph_backend.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
