"""Create task template tables

Revision ID: 4f2a9c1d7e30
Revises:
Create Date: 2026-10-18 10:12:41.503118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f2a9c1d7e30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # 创建 task_templates 表
    op.create_table(
        'task_templates',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('stage', sa.String(32), nullable=False, server_default=sa.text("'save'")),
        sa.Column('creator_id', sa.String(36), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_task_templates_created', 'task_templates', ['created_at'])

    # 创建 task_template_forms 表
    op.create_table(
        'task_template_forms',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('template_id', sa.String(36), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('content', sa.JSON(), nullable=True),
        sa.Column('creator_id', sa.String(36), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_task_forms_template_order', 'task_template_forms', ['template_id', 'order'])

    # 创建 task_template_steps 表
    op.create_table(
        'task_template_steps',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('template_id', sa.String(36), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('creator_id', sa.String(36), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_task_steps_template_order', 'task_template_steps', ['template_id', 'order'])

    # 创建 task_template_step_operates 表
    op.create_table(
        'task_template_step_operates',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('step_id', sa.String(36), sa.ForeignKey('task_template_steps.id'), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('creator_id', sa.String(36), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_task_operates_step', 'task_template_step_operates', ['step_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_task_operates_step', table_name='task_template_step_operates')
    op.drop_table('task_template_step_operates')
    op.drop_index('idx_task_steps_template_order', table_name='task_template_steps')
    op.drop_table('task_template_steps')
    op.drop_index('idx_task_forms_template_order', table_name='task_template_forms')
    op.drop_table('task_template_forms')
    op.drop_index('idx_task_templates_created', table_name='task_templates')
    op.drop_table('task_templates')
