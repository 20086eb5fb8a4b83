"""create catalog tables

Revision ID: 3b7e9c1a5d20
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3b7e9c1a5d20'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns():
    return [
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def _approval_columns():
    return [
        sa.Column('time', sa.String(), nullable=False),
        sa.Column('approved_at', sa.DateTime(), nullable=True),
        sa.Column('deprecated_at', sa.Date(), nullable=True),
        sa.Column('eol_date', sa.Date(), nullable=True),
        sa.Column('migration_target', sa.String(), nullable=True),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('approved_by', sa.String(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'teams',
        *_audit_columns(),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('responsibility_area', sa.String(), nullable=True),
    )
    op.create_index('ix_teams_name', 'teams', ['name'], unique=True)

    op.create_table(
        'technologies',
        *_audit_columns(),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('vendor', sa.String(), nullable=True),
        sa.Column('risk_level', sa.String(), nullable=True),
        sa.Column('approved_version_range', sa.String(), nullable=True),
        sa.Column('last_reviewed', sa.Date(), nullable=True),
    )
    op.create_index('ix_technologies_name', 'technologies', ['name'], unique=True)

    op.create_table(
        'versions',
        *_audit_columns(),
        sa.Column('technology_id', sa.Uuid(), sa.ForeignKey('technologies.id'), nullable=False),
        sa.Column('version', sa.String(), nullable=False),
        sa.Column('release_date', sa.Date(), nullable=True),
        sa.Column('eol_date', sa.Date(), nullable=True),
        sa.Column('approved', sa.Boolean(), nullable=False),
        sa.Column('cvss_score', sa.Float(), nullable=True),
        sa.UniqueConstraint('technology_id', 'version', name='uq_versions_technology_version'),
    )
    op.create_index('ix_versions_technology_id', 'versions', ['technology_id'])

    op.create_table(
        'team_technology_usage',
        *_audit_columns(),
        sa.Column('team_id', sa.Uuid(), sa.ForeignKey('teams.id'), nullable=False),
        sa.Column('technology_id', sa.Uuid(), sa.ForeignKey('technologies.id'), nullable=False),
        sa.Column('system_count', sa.Integer(), nullable=True),
        sa.Column('first_used', sa.Date(), nullable=True),
        sa.Column('last_verified', sa.Date(), nullable=True),
        sa.UniqueConstraint('team_id', 'technology_id', name='uq_usage_team_technology'),
    )
    op.create_index('ix_team_technology_usage_team_id', 'team_technology_usage', ['team_id'])
    op.create_index('ix_team_technology_usage_technology_id', 'team_technology_usage', ['technology_id'])

    op.create_table(
        'technology_approvals',
        *_audit_columns(),
        *_approval_columns(),
        sa.Column('team_id', sa.Uuid(), sa.ForeignKey('teams.id'), nullable=False),
        sa.Column('technology_id', sa.Uuid(), sa.ForeignKey('technologies.id'), nullable=False),
        sa.Column('version_constraint', sa.String(), nullable=True),
        sa.UniqueConstraint('team_id', 'technology_id', name='uq_technology_approvals_team_technology'),
    )
    op.create_index('ix_technology_approvals_team_id', 'technology_approvals', ['team_id'])
    op.create_index('ix_technology_approvals_technology_id', 'technology_approvals', ['technology_id'])

    op.create_table(
        'version_approvals',
        *_audit_columns(),
        *_approval_columns(),
        sa.Column('team_id', sa.Uuid(), sa.ForeignKey('teams.id'), nullable=False),
        sa.Column('version_id', sa.Uuid(), sa.ForeignKey('versions.id'), nullable=False),
        sa.UniqueConstraint('team_id', 'version_id', name='uq_version_approvals_team_version'),
    )
    op.create_index('ix_version_approvals_team_id', 'version_approvals', ['team_id'])
    op.create_index('ix_version_approvals_version_id', 'version_approvals', ['version_id'])

    op.create_table(
        'policies',
        *_audit_columns(),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('rule_type', sa.String(), nullable=True),
        sa.Column('severity', sa.String(), nullable=False),
        sa.Column('effective_date', sa.Date(), nullable=True),
        sa.Column('expiry_date', sa.Date(), nullable=True),
        sa.Column('scope', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
    )
    op.create_index('ix_policies_name', 'policies', ['name'], unique=True)

    for table, column, target in (
        ('policy_technologies', 'technology_id', 'technologies.id'),
        ('policy_enforcers', 'team_id', 'teams.id'),
        ('policy_subjects', 'team_id', 'teams.id'),
    ):
        op.create_table(
            table,
            sa.Column('policy_id', sa.Uuid(), sa.ForeignKey('policies.id'), primary_key=True),
            sa.Column(column, sa.Uuid(), sa.ForeignKey(target), primary_key=True),
        )

    op.create_table(
        'systems',
        *_audit_columns(),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('owner_team_id', sa.Uuid(), sa.ForeignKey('teams.id'), nullable=True),
    )
    op.create_index('ix_systems_name', 'systems', ['name'], unique=True)
    op.create_index('ix_systems_owner_team_id', 'systems', ['owner_team_id'])

    op.create_table(
        'components',
        *_audit_columns(),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('version', sa.String(), nullable=True),
        sa.Column('purl', sa.String(), nullable=True),
        sa.Column('technology_id', sa.Uuid(), sa.ForeignKey('technologies.id'), nullable=True),
    )
    op.create_index('ix_components_name', 'components', ['name'])
    op.create_index('ix_components_technology_id', 'components', ['technology_id'])

    op.create_table(
        'system_components',
        sa.Column('system_id', sa.Uuid(), sa.ForeignKey('systems.id'), primary_key=True),
        sa.Column('component_id', sa.Uuid(), sa.ForeignKey('components.id'), primary_key=True),
    )


def downgrade() -> None:
    for table in (
        'system_components',
        'components',
        'systems',
        'policy_subjects',
        'policy_enforcers',
        'policy_technologies',
        'policies',
        'version_approvals',
        'technology_approvals',
        'team_technology_usage',
        'versions',
        'technologies',
        'teams',
    ):
        op.drop_table(table)
