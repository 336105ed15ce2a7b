"""Group Endpoints — create groups, add members, and get group recommendations.

Invariants:
    - Every endpoint requires an authenticated caller (get_caller_id)
    - Only existing members may add members or ask for recommendations
    - Membership is a set: adding an existing member succeeds without a duplicate row
    - Membership changes schedule a background group signature refresh (same
      reaction as the membership-changed trigger)
    - Recommendations read the persisted group signature; they never recompute it

Design Decisions:
    - Empty-membership check precedes the membership check so FAILED_PRECONDITION
      is reachable for a group whose members all left
    - Background refresh uses its own DB session: the request session is closed
      when it runs
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tastebud.api.dependencies import get_caller_id
from tastebud.core.domain_types import RANKED_MATCH_LIMIT, SINGLE_MATCH_LIMIT
from tastebud.core.errors import (
    ErrorContext, FailedPreconditionError, PermissionDeniedError,
    ResourceNotFoundError,
)
from tastebud.infrastructure.database import get_db
from tastebud.models.taste_group import GroupMember, TasteGroup
from tastebud.models.user import User
from tastebud.schemas.group import (
    AddMemberRequest, AddMemberResponse, GroupCreate, GroupCreated,
    RecommendationResponse, RecommendedRestaurant,
)
from tastebud.services.recommendation import RestaurantRecommender
from tastebud.services.signature_refresh import SignatureRefresher

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/groups", tags=["groups"])


async def get_group_or_404(group_id: str, db: AsyncSession) -> TasteGroup:
    """Get group or raise NOT_FOUND."""
    group = await db.get(TasteGroup, group_id)
    if not group:
        raise ResourceNotFoundError(
            "Group", group_id, ErrorContext(group_id=group_id),
        )
    return group


async def _member_ids(group_id: str, db: AsyncSession) -> set[str]:
    result = await db.execute(
        select(GroupMember.user_id).where(GroupMember.group_id == group_id),
    )
    return set(result.scalars().all())


async def _refresh_group_in_background(group_id: str) -> None:
    """Background task: recompute the group's signature after a membership change."""
    from tastebud.infrastructure.database import db_manager

    if not db_manager:
        logger.error(
            f"Cannot refresh group {group_id}: database not initialized",
            extra={"group_id": group_id},
        )
        return

    async with db_manager.session() as db:
        await SignatureRefresher(db).refresh_group(group_id)


@router.post(
    "", response_model=GroupCreated, status_code=status.HTTP_201_CREATED,
)
async def create_group(
    body: GroupCreate,
    background_tasks: BackgroundTasks,
    caller_id: str = Depends(get_caller_id),
    db: AsyncSession = Depends(get_db),
):
    """Create a group with the caller as its first member."""
    group = TasteGroup(
        name=body.name, created_by=caller_id,
        taste_signature={}, review_count=0, allergies={},
    )
    db.add(group)
    await db.flush()
    db.add(GroupMember(group_id=group.id, user_id=caller_id))
    await db.commit()
    logger.info(
        f"Group '{group.name}' created",
        extra={"group_id": group.id, "user_id": caller_id},
    )
    background_tasks.add_task(_refresh_group_in_background, group.id)
    return GroupCreated(group_id=group.id)


@router.post("/{group_id}/members", response_model=AddMemberResponse)
async def add_member(
    group_id: str,
    body: AddMemberRequest,
    background_tasks: BackgroundTasks,
    caller_id: str = Depends(get_caller_id),
    db: AsyncSession = Depends(get_db),
):
    """Add a user (by email) to a group the caller belongs to."""
    await get_group_or_404(group_id, db)
    members = await _member_ids(group_id, db)
    if caller_id not in members:
        raise PermissionDeniedError(
            "You are not a member of this group.",
            ErrorContext(user_id=caller_id, group_id=group_id),
        )

    result = await db.execute(
        select(User.id).where(User.email == body.email).limit(1),
    )
    new_member_id = result.scalar_one_or_none()
    if not new_member_id:
        raise ResourceNotFoundError(
            "User", body.email,
            message=f"User with email {body.email} not found.",
        )

    if new_member_id in members:
        return AddMemberResponse(message="User is already a member.")

    db.add(GroupMember(group_id=group_id, user_id=new_member_id))
    await db.commit()
    logger.info(
        f"User {new_member_id} added to group {group_id}",
        extra={"group_id": group_id, "user_id": caller_id},
    )
    background_tasks.add_task(_refresh_group_in_background, group_id)
    return AddMemberResponse()


async def _recommend_for_group(
    group_id: str, caller_id: str, limit: int, db: AsyncSession,
) -> RecommendationResponse:
    group = await get_group_or_404(group_id, db)
    members = await _member_ids(group_id, db)
    if not members:
        raise FailedPreconditionError(
            "This group has no members.", ErrorContext(group_id=group_id),
        )
    if caller_id not in members:
        raise PermissionDeniedError(
            "You are not a member of this group.",
            ErrorContext(user_id=caller_id, group_id=group_id),
        )

    signature = group.taste_signature or {}
    recommendation = await RestaurantRecommender(db).recommend(
        signature, limit, subject_id=group_id,
    )
    reason = recommendation.reason("group")
    return RecommendationResponse(
        group_id=group_id,
        top_dimension=recommendation.top_dimension,
        recommendations=[
            RecommendedRestaurant(
                id=r.id, name=r.name, address=r.address,
                score=float(r.taste_signature[recommendation.top_dimension]),
                reason=reason,
            )
            for r in recommendation.restaurants
        ],
    )


@router.get(
    "/{group_id}/recommendations", response_model=RecommendationResponse,
)
async def get_group_recommendations(
    group_id: str,
    caller_id: str = Depends(get_caller_id),
    db: AsyncSession = Depends(get_db),
):
    """Ranked list of restaurants for the group's top flavor."""
    return await _recommend_for_group(
        group_id, caller_id, RANKED_MATCH_LIMIT, db,
    )


@router.get(
    "/{group_id}/recommendation", response_model=RecommendationResponse,
)
async def get_group_recommendation(
    group_id: str,
    caller_id: str = Depends(get_caller_id),
    db: AsyncSession = Depends(get_db),
):
    """Single best restaurant for the group's top flavor."""
    return await _recommend_for_group(
        group_id, caller_id, SINGLE_MATCH_LIMIT, db,
    )
