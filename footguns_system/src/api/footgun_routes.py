"""
Footgun API Routes

Read-only REST endpoints over the footgun catalog.
"""

from fastapi import APIRouter, Query, HTTPException, Request
from pydantic import BaseModel
from typing import List, Optional, Dict

from ..catalog import FootgunCatalog, FootgunRecord, FootgunSearchEngine
from ..exceptions import NotFoundError

router = APIRouter(prefix="/footguns", tags=["Footguns"])


# Response Models
class RemedyResponse(BaseModel):
    label: str
    guidance: str
    code: Optional[str] = None


class ReproductionResponse(BaseModel):
    scenario: str
    code: Optional[str] = None


class FootgunResponse(BaseModel):
    id: int
    framework: str
    title: str
    status: str
    explanation: str
    reproduction: ReproductionResponse
    remedies: List[RemedyResponse]
    fixed_in: Optional[str] = None
    notes: List[str] = []


class SearchResultResponse(BaseModel):
    footgun: FootgunResponse
    relevance_score: float
    matched_terms: List[str]


class StatisticsResponse(BaseModel):
    total_footguns: int
    total_frameworks: int
    open_footguns: int
    by_framework: Dict[str, int]
    by_status: Dict[str, int]


def _catalog(request: Request) -> FootgunCatalog:
    return request.app.state.catalog


def _search_engine(request: Request) -> FootgunSearchEngine:
    return request.app.state.search_engine


def to_response(record: FootgunRecord) -> FootgunResponse:
    return FootgunResponse(**record.to_dict())


# Routes
@router.get("", response_model=List[FootgunResponse])
async def list_footguns(request: Request):
    """All footguns in catalog order"""
    return [to_response(r) for r in _catalog(request)]


@router.get("/open", response_model=List[FootgunResponse])
async def list_open_footguns(request: Request):
    """Unresolved footguns"""
    return [to_response(r) for r in _catalog(request).all_open()]


@router.get("/stats", response_model=StatisticsResponse)
async def get_statistics(request: Request):
    """Get statistics about the footgun catalog"""
    return _catalog(request).get_statistics()


@router.get("/frameworks")
async def list_frameworks(request: Request):
    """Frameworks in the catalog with footgun counts"""
    catalog = _catalog(request)
    return {
        "frameworks": [
            {"name": name, "footgun_count": len(catalog.by_framework(name))}
            for name in catalog.frameworks
        ]
    }


@router.get("/framework/{name}", response_model=List[FootgunResponse])
async def get_footguns_for_framework(name: str, request: Request):
    """Footguns for one framework; empty for an unknown framework"""
    return [to_response(r) for r in _catalog(request).by_framework(name)]


@router.get("/search", response_model=List[SearchResultResponse])
async def search(
    request: Request,
    q: str = Query(..., description="Search query"),
    limit: int = Query(10, ge=1, le=100, description="Maximum results")
):
    """Search footguns by keyword"""
    results = _search_engine(request).search(q, limit)
    return [
        SearchResultResponse(
            footgun=to_response(m.record),
            relevance_score=m.relevance_score,
            matched_terms=m.matched_terms
        )
        for m in results
    ]


@router.get("/{footgun_id}", response_model=FootgunResponse)
async def get_footgun(footgun_id: int, request: Request):
    """Get a single footgun by id"""
    try:
        return to_response(_catalog(request).by_id(footgun_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.to_dict())
