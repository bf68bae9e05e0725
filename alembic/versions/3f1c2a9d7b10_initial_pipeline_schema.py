"""Initial pipeline schema

Creates organizations, users, roles, candidates and the append-only
candidate_stage_events table.

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


STAGES = (
    'Application Submitted',
    'Recruiter Screening',
    'Hiring Manager Review',
    'Interview Round 1',
    'Interview Round 2',
    'Offer Extended',
    'Offer Accepted',
    'Background Check',
    'Joined',
)

REASON_CODES = (
    'Compensation mismatch',
    'Role mismatch',
    'Interview feedback',
    'Candidate withdrew',
    'Ghosted',
    'Failed background check',
    'Other',
)


def upgrade() -> None:
    """Upgrade schema - create the pipeline tables."""
    userrole_enum = postgresql.ENUM('recruiter', 'admin', 'manager', name='userrole')
    stage_enum = postgresql.ENUM(*STAGES, name='pipelinestage')
    status_enum = postgresql.ENUM('active', 'rejected', 'withdrawn', 'hired', name='candidatestatus')
    action_enum = postgresql.ENUM('advance', 'reject', 'withdraw', name='actiontype')
    reason_enum = postgresql.ENUM(*REASON_CODES, name='reasoncode')

    bind = op.get_bind()
    for enum_type in (userrole_enum, stage_enum, status_enum, action_enum, reason_enum):
        enum_type.create(bind, checkfirst=True)

    def existing(enum_type):
        return postgresql.ENUM(*enum_type.enums, name=enum_type.name, create_type=False)

    # 1. organizations (tenant boundary)
    op.create_table(
        'organizations',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_organizations_id', 'organizations', ['id'])
    op.create_index('ix_organizations_created_at', 'organizations', ['created_at'])

    # 2. users
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('organization_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('role', existing(userrole_enum), nullable=False, server_default='recruiter'),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_organization_id', 'users', ['organization_id'])

    # 3. roles (job openings)
    op.create_table(
        'roles',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('organization_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('role_name', sa.String(), nullable=False),
        sa.Column('department', sa.String(), nullable=True),
        sa.Column('seniority', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_roles_id', 'roles', ['id'])
    op.create_index('ix_roles_organization_id', 'roles', ['organization_id'])
    op.create_index('ix_roles_role_name', 'roles', ['role_name'])

    # 4. candidates
    op.create_table(
        'candidates',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('organization_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('role_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('recruiter_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('source', sa.String(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('current_stage', existing(stage_enum), nullable=False, server_default='Application Submitted'),
        sa.Column('status', existing(status_enum), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['recruiter_id'], ['users.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_candidates_id', 'candidates', ['id'])
    op.create_index('ix_candidates_organization_id', 'candidates', ['organization_id'])
    op.create_index('ix_candidates_role_id', 'candidates', ['role_id'])
    op.create_index('ix_candidates_source', 'candidates', ['source'])
    op.create_index('ix_candidates_current_stage', 'candidates', ['current_stage'])
    op.create_index('ix_candidates_status', 'candidates', ['status'])
    op.create_index('ix_candidates_created_at', 'candidates', ['created_at'])

    # 5. candidate_stage_events (append-only, no updated_at)
    op.create_table(
        'candidate_stage_events',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('candidate_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('organization_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('from_stage', existing(stage_enum), nullable=True),
        sa.Column('to_stage', existing(stage_enum), nullable=False),
        sa.Column('action_type', existing(action_enum), nullable=False),
        sa.Column('reason_code', existing(reason_enum), nullable=False),
        sa.Column('reason_text', sa.Text(), nullable=True),
        sa.Column('moved_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('moved_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['candidate_id'], ['candidates.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['moved_by'], ['users.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_candidate_stage_events_id', 'candidate_stage_events', ['id'])
    op.create_index('ix_candidate_stage_events_candidate_id', 'candidate_stage_events', ['candidate_id'])
    op.create_index('ix_candidate_stage_events_organization_id', 'candidate_stage_events', ['organization_id'])
    op.create_index('ix_candidate_stage_events_to_stage', 'candidate_stage_events', ['to_stage'])
    op.create_index('ix_candidate_stage_events_action_type', 'candidate_stage_events', ['action_type'])
    op.create_index('ix_candidate_stage_events_moved_at', 'candidate_stage_events', ['moved_at'])


def downgrade() -> None:
    """Downgrade schema - drop the pipeline tables."""
    op.drop_table('candidate_stage_events')
    op.drop_table('candidates')
    op.drop_table('roles')
    op.drop_table('users')
    op.drop_table('organizations')

    op.execute('DROP TYPE IF EXISTS reasoncode')
    op.execute('DROP TYPE IF EXISTS actiontype')
    op.execute('DROP TYPE IF EXISTS candidatestatus')
    op.execute('DROP TYPE IF EXISTS pipelinestage')
    op.execute('DROP TYPE IF EXISTS userrole')
