"""Initial schema - posts, postmeta, terms, term_relationships.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "posts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("post_type", sa.String(20), nullable=False, server_default="post"),
        sa.Column("post_title", sa.Text, nullable=False, server_default=""),
        sa.Column("post_name", sa.String(200), nullable=False, server_default=""),
        sa.Column("post_content", sa.Text, nullable=False, server_default=""),
        sa.Column("post_excerpt", sa.Text, nullable=False, server_default=""),
        sa.Column("post_status", sa.String(20), nullable=False, server_default="publish"),
        sa.Column("post_parent", sa.Integer, nullable=False, server_default="0"),
        sa.Column("menu_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("post_password", sa.String(255), nullable=False, server_default=""),
        sa.Column("post_author", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("modified_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_posts_post_type", "posts", ["post_type"])
    op.create_index("ix_posts_post_name", "posts", ["post_name"])

    op.create_table(
        "postmeta",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "post_id", sa.Integer,
            sa.ForeignKey("posts.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("meta_key", sa.String(255), nullable=False),
        sa.Column("meta_value", sa.JSON, nullable=True),
        sa.UniqueConstraint("post_id", "meta_key", name="uq_postmeta_post_id"),
    )
    op.create_index("ix_postmeta_post_id", "postmeta", ["post_id"])

    op.create_table(
        "terms",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("taxonomy", sa.String(32), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(200), nullable=False),
        sa.Column("parent", sa.Integer, nullable=False, server_default="0"),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.UniqueConstraint("taxonomy", "slug", name="uq_terms_taxonomy"),
    )
    op.create_index("ix_terms_taxonomy", "terms", ["taxonomy"])

    op.create_table(
        "term_relationships",
        sa.Column(
            "post_id", sa.Integer,
            sa.ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "term_id", sa.Integer,
            sa.ForeignKey("terms.id", ondelete="CASCADE"), primary_key=True,
        ),
    )


def downgrade() -> None:
    op.drop_table("term_relationships")
    op.drop_index("ix_terms_taxonomy", table_name="terms")
    op.drop_table("terms")
    op.drop_index("ix_postmeta_post_id", table_name="postmeta")
    op.drop_table("postmeta")
    op.drop_index("ix_posts_post_name", table_name="posts")
    op.drop_index("ix_posts_post_type", table_name="posts")
    op.drop_table("posts")
