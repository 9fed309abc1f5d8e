import uuid
from typing import Any, Dict, Mapping, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from solvinghub.business.services.envelope import cursor_envelope, offset_envelope
from solvinghub.business.services.query_params import parse_problem_query
from solvinghub.business.services.sanitize import sanitize_problem_data
from solvinghub.config import Config, logger
from solvinghub.data.repositories import (
    create_problem_in_db,
    delete_problem_from_db,
    ensure_user_profile,
    get_pagination_strategy,
    get_problem_by_id,
    get_problem_with_owner,
    get_users_by_ids,
    increment_view_count,
    update_problem_in_db,
)
from solvinghub.data.repositories.problem_listing import PaginationStrategy
from solvinghub.data.schemas import (
    AuthenticatedUser,
    ProblemCreate,
    ProblemOwner,
    ProblemResponse,
    ProblemUpdate,
    check_problem_fields,
)
from solvinghub.errors import AuthorizationException, ValidationException
from solvinghub.storage.models import Problem, User

problem_logger = logger.getChild("problem")


def calculate_quality_score(
    title: str = "",
    description: str = "",
    tags: Sequence[str] = (),
    impacts: Sequence[str] = (),
    challenges: Sequence[str] = (),
) -> float:
    """Completeness score in [0, 1] rewarding detailed, well-tagged problems."""
    score = 0.0
    score += min(len(title or "") / 100.0, 0.2)
    score += min(len(description or "") / 500.0, 0.3)
    score += min(len(tags or ()) / 5.0 * 0.2, 0.2)
    score += min(len(impacts or ()) / 3.0 * 0.15, 0.15)
    score += min(len(challenges or ()) / 3.0 * 0.15, 0.15)
    return round(min(score, 1.0), 2)


def clean_problem_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Sanitises problem fields and re-checks the length and list rules on the result."""
    cleaned = sanitize_problem_data(data)
    errors = check_problem_fields(cleaned)
    if errors:
        problem_logger.info(f"Problem fields invalid after sanitising: {errors}")
        raise ValidationException(details=errors)
    return cleaned


def to_response(problem: Problem, owner: Optional[User] = None) -> ProblemResponse:
    response = ProblemResponse.model_validate(problem)
    if owner is not None:
        response.user = ProblemOwner.model_validate(owner)
    return response


async def list_problems(
    db: AsyncSession,
    params: Mapping[str, str],
    strategy: Optional[PaginationStrategy] = None,
) -> Dict[str, Any]:
    query = parse_problem_query(params)
    strategy = strategy or get_pagination_strategy(
        Config.PAGINATION_STRATEGY, Config.PAGINATION_RPC_NAME
    )
    problem_logger.info(
        f"Listing problems via {strategy.name}: limit={query.limit} offset={query.offset} "
        f"sort={query.sort_field.value} category={query.category} status={query.status}"
    )
    page = await strategy.fetch(db, query)

    owners = await get_users_by_ids(db, [p.user_id for p in page.problems])
    problems = [to_response(p, owners.get(p.user_id)) for p in page.problems]

    if page.style == "cursor":
        return cursor_envelope(problems, page.limit)
    return offset_envelope(problems, page.total, page.limit, page.offset)


async def create_problem(
    db: AsyncSession, payload: ProblemCreate, user: AuthenticatedUser
) -> ProblemResponse:
    data = clean_problem_data(payload.model_dump(mode="json"))
    data["quality_score"] = calculate_quality_score(
        data["title"], data["description"], data["tags"], data["impacts"], data["challenges"]
    )
    owner = await ensure_user_profile(db, user)
    problem = await create_problem_in_db(db, data, user.id)
    return to_response(problem, owner)


async def get_problem(db: AsyncSession, problem_id: uuid.UUID) -> ProblemResponse:
    problem, owner = await get_problem_with_owner(db, problem_id)
    response = to_response(problem, owner)
    await increment_view_count(db, problem_id)
    return response


async def get_owned_problem(
    db: AsyncSession, problem_id: uuid.UUID, user: AuthenticatedUser, action: str
) -> Problem:
    problem = await get_problem_by_id(db, problem_id)
    if problem.user_id != user.id:
        problem_logger.warning(f"User {user.id} tried to {action} problem {problem_id}")
        raise AuthorizationException(
            detail=f"Forbidden: You can only {action} your own problems"
        )
    return problem


async def update_problem(
    db: AsyncSession, problem: Problem, payload: ProblemUpdate
) -> ProblemResponse:
    changes = clean_problem_data(payload.changes())
    if changes:
        merged = {
            key: changes.get(key, getattr(problem, key))
            for key in ("title", "description", "tags", "impacts", "challenges")
        }
        changes["quality_score"] = calculate_quality_score(**merged)
        problem = await update_problem_in_db(db, problem, changes)
    owners = await get_users_by_ids(db, [problem.user_id])
    return to_response(problem, owners.get(problem.user_id))


async def delete_problem(db: AsyncSession, problem: Problem) -> None:
    await delete_problem_from_db(db, problem.id)
