from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import GitHubValidationError

M = TypeVar("M", bound=BaseModel)

# GitHub account names: alphanumerics and single hyphens, max 39 chars,
# no leading/trailing hyphen.
_OWNER_RE = re.compile(r"^[a-z0-9](?:[a-z0-9]|-(?=[a-z0-9])){0,38}$")
_REPO_RE = re.compile(r"^[a-z0-9_.-]+$")
MAX_REPO_LENGTH = 100


def _owner_name_problem(owner: str) -> Optional[str]:
    """Return a description of what is wrong with `owner`, or None if valid."""
    if not owner:
        return "Owner name cannot be empty"
    if owner.startswith("-") or owner.endswith("-"):
        return "Owner name cannot start or end with a hyphen"
    if not _OWNER_RE.match(owner):
        return (
            "Invalid owner name: use letters, digits and single hyphens "
            "(max 39 characters)"
        )
    return None


def _repository_name_problem(repo: str) -> Optional[str]:
    if not repo:
        return "Repository name cannot be empty"
    if len(repo) > MAX_REPO_LENGTH:
        return f"Repository name cannot exceed {MAX_REPO_LENGTH} characters"
    if not _REPO_RE.match(repo):
        return (
            "Invalid repository name: use letters, digits, hyphens, "
            "underscores and periods"
        )
    if repo.startswith(".") or repo.endswith("."):
        return "Repository name cannot start or end with a period"
    return None


def normalize_name(value: str) -> str:
    return value.strip().lower()


def validate_owner_name(owner: str) -> str:
    """Normalize and validate an owner (user/org) name."""
    sanitized = normalize_name(owner)
    problem = _owner_name_problem(sanitized)
    if problem:
        raise GitHubValidationError(
            f"owner: {problem}",
            field_errors=[{"field": "owner", "message": problem}],
        )
    return sanitized


def validate_repository_name(repo: str) -> str:
    """Normalize and validate a repository name."""
    sanitized = normalize_name(repo)
    problem = _repository_name_problem(sanitized)
    if problem:
        raise GitHubValidationError(
            f"repo: {problem}",
            field_errors=[{"field": "repo", "message": problem}],
        )
    return sanitized


def _field_errors(exc: PydanticValidationError) -> List[Dict[str, str]]:
    errors: List[Dict[str, str]] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
        msg = err.get("msg", "invalid value")
        # field_validator failures are prefixed by pydantic
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, ") :]
        errors.append({"field": loc, "message": msg})
    return errors


def validate_input(model: Type[M], **params: Any) -> M:
    """
    Validate a complete parameter set against an input model.
    Raises GitHubValidationError listing every invalid field.
    """
    try:
        return model.model_validate(params)
    except PydanticValidationError as exc:
        field_errors = _field_errors(exc)
        fields = ", ".join(e["field"] for e in field_errors)
        raise GitHubValidationError(
            f"Invalid parameters: {fields}", field_errors=field_errors
        ) from exc


__all__ = [
    "validate_owner_name",
    "validate_repository_name",
    "validate_input",
]
