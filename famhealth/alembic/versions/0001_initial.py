"""Initial database schema."""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamp(name: str, onupdate: bool = False) -> sa.Column:
    kwargs = {"server_onupdate": sa.text("CURRENT_TIMESTAMP")} if onupdate else {}
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False, **kwargs)


def upgrade():
    # Encrypted columns are Fernet tokens stored as TEXT
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, index=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=120)),
        _timestamp("created_at"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "user_profile",
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("age", sa.Text),
        sa.Column("sex", sa.Text),
        sa.Column("height", sa.Text),
        sa.Column("weight", sa.Text),
        sa.Column("lifestyle", sa.Text),
        sa.Column("onboarding_completed", sa.Boolean, nullable=False, server_default=sa.text("false")),
        _timestamp("updated_at", onupdate=True),
    )

    op.create_table(
        "family_members",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("relation", sa.String(length=40), nullable=False),
        sa.Column("name", sa.String(length=120)),
        sa.Column("age", sa.Integer),
        sa.Column("is_alive", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column("age_at_death", sa.Integer),
        sa.Column("cause_of_death", sa.Text),
        sa.Column("condition_list", sa.Text),
        sa.Column("condition_details", sa.Text),
        _timestamp("created_at"),
    )

    op.create_table(
        "health_history",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True),
        sa.Column("current_conditions", sa.Text),
        sa.Column("condition_details", sa.Text),
        sa.Column("medications", sa.Text),
        sa.Column("allergies", sa.Text),
        sa.Column("surgeries", sa.Text),
        _timestamp("updated_at", onupdate=True),
    )

    op.create_table(
        "test_results",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("family_member_id", sa.String(length=36), sa.ForeignKey("family_members.id", ondelete="SET NULL")),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("content", sa.Text),
        sa.Column("file_path", sa.String(length=255)),
        _timestamp("created_at"),
    )

    op.create_table(
        "chat_logs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("response", sa.Text, nullable=False),
        sa.Column("source", sa.String(length=16), nullable=False, server_default="model"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade():
    op.drop_table("chat_logs")
    op.drop_table("test_results")
    op.drop_table("health_history")
    op.drop_table("family_members")
    op.drop_table("user_profile")
    op.drop_table("users")
