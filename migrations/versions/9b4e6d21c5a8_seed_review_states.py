"""seed_review_states

Revision ID: 9b4e6d21c5a8
Revises: 3f1c2a9d7b10
Create Date: 2026-09-14 10:40:51.902117

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "9b4e6d21c5a8"
down_revision: Union[str, Sequence[str], None] = "3f1c2a9d7b10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Seed the default review states."""
    # (name, color, display_order, is_default, kind)
    states = [
        ("Pending", "#FCD34D", 0, True, "initial_default"),
        ("In progress", "#60A5FA", 1, False, "transient"),
        ("Analyzed", "#34D399", 2, False, "normal"),
        ("Incomplete", "#F87171", 3, False, "normal"),
        ("Needs review", "#A78BFA", 4, False, "normal"),
    ]

    review_states_table = sa.table(
        "review_states",
        sa.column("name", sa.String),
        sa.column("color", sa.String),
        sa.column("display_order", sa.Integer),
        sa.column("is_default", sa.Boolean),
        sa.column("kind", sa.String),
    )

    op.bulk_insert(
        review_states_table,
        [
            {
                "name": name,
                "color": color,
                "display_order": display_order,
                "is_default": is_default,
                "kind": kind,
            }
            for name, color, display_order, is_default, kind in states
        ],
    )


def downgrade() -> None:
    """Remove seeded review states."""
    op.execute(
        """
        DELETE FROM review_states WHERE name IN (
            'Pending', 'In progress', 'Analyzed', 'Incomplete', 'Needs review'
        )
        """
    )
