from fastapi import APIRouter, Depends, Query
from medialib.auth import require_session
from medialib.config import MAX_RECURSION_DEPTH, MAX_SEARCH_RESULTS, MIN_QUERY_LENGTH
from medialib.library import classifier, resolve_request_path
from medialib.walker import list_directory, search

router = APIRouter(prefix="/api", tags=["browse"], dependencies=[Depends(require_session)])


@router.get("/browse")
def api_browse(path: str = Query(default="", description="Folder relative to the media root")):
    target = resolve_request_path(path)
    listing = list_directory(target, classifier)
    return {"path": target.relative, **listing.to_dict()}


@router.get("/search")
def api_search(q: str = "", path: str = ""):
    query = q.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return {"query": query, "results": [], "count": 0, "limited": False}
    start = resolve_request_path(path)
    results = search(
        start,
        query,
        classifier,
        max_depth=MAX_RECURSION_DEPTH,
        max_results=MAX_SEARCH_RESULTS + 1,
        min_query_length=MIN_QUERY_LENGTH,
    )
    # one extra match tells a full page apart from a truncated one
    limited = len(results) > MAX_SEARCH_RESULTS
    results = results[:MAX_SEARCH_RESULTS]
    return {
        "query": query,
        "results": [r.to_dict() for r in results],
        "count": len(results),
        "limited": limited,
    }
