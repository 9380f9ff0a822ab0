"""Analysis submission domain service."""

from typing import Optional

import logfire

from desk.domain.error import SubmissionFailedError
from desk.domain.model.comment import Comment
from desk.domain.model.common import DomainModel
from desk.domain.model.material import Material
from desk.domain.model.profile import CurrentUser
from desk.domain.value import MaterialId, ReviewStateId, TagId

from .base import Service
from .comment_service import CommentService, normalize_content
from .material_service import MaterialService
from .review_state_service import ReviewStateService
from .tag_service import TagService

# Write steps, in execution order
STEP_COMMENT = "comment"
STEP_REVIEW_STATE = "review_state"
STEP_TAGS = "tags"


class AnalysisResult(DomainModel):
    """Outcome of a saved analysis."""

    material: Material
    comment: Optional[Comment] = None
    tag_ids: list[TagId]


class AnalysisService(Service):
    """Domain service committing the outcome of a review session.

    Everything is validated before the first write. The writes then run in
    a fixed order with tag replacement last. Within a database transaction
    they commit or roll back together. If a step fails, the steps already
    applied are logged so the material can be reconciled by hand.
    """

    def __init__(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
        tag_service: TagService,
        comment_service: CommentService,
    ) -> None:
        """Initialize analysis service.

        Args:
            material_service: Material service
            review_state_service: Review state service
            tag_service: Tag service
            comment_service: Comment service
        """
        self.material_service = material_service
        self.review_state_service = review_state_service
        self.tag_service = tag_service
        self.comment_service = comment_service

    async def submit(
        self,
        material_id: MaterialId,
        author: CurrentUser,
        comment: Optional[str],
        review_state_id: Optional[ReviewStateId],
        tag_ids: list[TagId],
    ) -> AnalysisResult:
        """Save a review: optional comment, final state and full tag set.

        Args:
            material_id: Reviewed material
            author: Signed-in reviewer
            comment: Optional comment text (trimmed, at most 5000 characters)
            review_state_id: Chosen final state (None clears the state)
            tag_ids: Complete desired tag set

        Returns:
            Updated material, created comment (if any) and the tag set

        Raises:
            ValidationError: If the comment is too long or the state is the
                in-progress marker
            NotFoundError: If the material does not exist
            InvalidReferenceError: If the state or a tag does not exist
            SubmissionFailedError: If a write fails after validation
        """
        with logfire.span(
            "analysis_service.submit",
            material_id=str(material_id),
            author_id=str(author.id),
            review_state_id=str(review_state_id) if review_state_id else None,
            tag_count=len(tag_ids),
        ):
            # Validate everything before the first write
            content = normalize_content(comment)
            material = await self.material_service.get_material(material_id)
            if review_state_id is not None:
                await self.review_state_service.validate_outcome_state(review_state_id)
            desired_tags = list(dict.fromkeys(tag_ids))
            await self.tag_service.validate_tags_exist(desired_tags)

            previous_tag_ids = await self.material_service.get_tag_ids(material_id)

            completed: list[str] = []
            step = STEP_COMMENT
            created: Optional[Comment] = None
            try:
                if content:
                    created = await self.comment_service.create_comment(
                        material_id, author, content, review_state_id
                    )
                    completed.append(STEP_COMMENT)

                step = STEP_REVIEW_STATE
                updated = await self.material_service.set_review_state(
                    material_id, review_state_id
                )
                completed.append(STEP_REVIEW_STATE)

                step = STEP_TAGS
                await self.material_service.replace_tags(material_id, desired_tags)
                completed.append(STEP_TAGS)
            except Exception as e:
                logfire.error(
                    "Analysis submission failed part-way",
                    material_id=str(material_id),
                    failed_step=step,
                    completed_steps=completed,
                    created_comment_id=str(created.id) if created else None,
                    previous_state_id=str(material.review_state_id)
                    if material.review_state_id
                    else None,
                    previous_tag_ids=[str(t) for t in previous_tag_ids],
                    error=str(e),
                )
                raise SubmissionFailedError(str(material_id), step, completed) from e

            logfire.info(
                "Analysis submitted",
                material_id=str(material_id),
                comment_id=str(created.id) if created else None,
                review_state_id=str(review_state_id) if review_state_id else None,
                tag_count=len(desired_tags),
            )
            return AnalysisResult(material=updated, comment=created, tag_ids=desired_tags)
