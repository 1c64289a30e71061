"""Tournament scoring and leaderboard endpoints."""

from typing import Annotated, Any, TypeVar

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, ValidationError

from spunk_analytics.api.dependencies import JsonBodyDep, TournamentDep
from spunk_analytics.api.errors import INVALID_REQUEST_MESSAGE
from spunk_analytics.schemas.tournament import ActionRequest, ReferralRequest

router = APIRouter(prefix="/tournament", tags=["tournament"])

WalletQuery = Annotated[str | None, Query(description="Wallet address")]

RequestT = TypeVar("RequestT", bound=BaseModel)


def _validate_body(model: type[RequestT], body: dict[str, Any]) -> RequestT:
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=INVALID_REQUEST_MESSAGE,
        ) from exc


@router.post("/action")
async def record_action(body: JsonBodyDep, engine: TournamentDep) -> dict[str, Any]:
    """Award points to a wallet for a scoring action.

    Args:
        body: ``{"wallet": ..., "action": ...}``
        engine: Tournament engine

    Returns:
        The wallet's new score, the action and the points earned

    Raises:
        HTTPException: If the wallet or action is missing or not a scalar
    """
    request = _validate_body(ActionRequest, body)
    if not request.wallet or not request.action:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing wallet or action",
        )
    result = await engine.record_action(request.wallet, request.action)
    return {
        "ok": True,
        "score": result["score"],
        "action": request.action,
        "points_earned": result["points_earned"],
    }


@router.post("/referral")
async def record_referral(body: JsonBodyDep, engine: TournamentDep) -> dict[str, Any]:
    """Reward a referrer once per referred wallet."""
    request = _validate_body(ReferralRequest, body)
    if not request.referrer or not request.referred:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing referrer or referred wallet",
        )
    result = await engine.record_referral(request.referrer, request.referred)
    return {"ok": True, **result}


@router.get("/leaderboard")
async def get_leaderboard(engine: TournamentDep, wallet: WalletQuery = None) -> dict[str, Any]:
    """Return the top 10 and, when ``wallet`` is given, that wallet's rank."""
    return await engine.leaderboard(wallet or None)


@router.get("/info")
async def get_info(engine: TournamentDep) -> dict[str, Any]:
    """Return tournament metadata and the current number of players."""
    return await engine.info()


@router.get("/me")
async def get_player_status(engine: TournamentDep, wallet: WalletQuery = None) -> dict[str, Any]:
    """Return the caller's record and rank."""
    if not wallet:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing wallet param",
        )
    return await engine.player_status(wallet)
