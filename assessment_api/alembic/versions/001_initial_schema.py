"""Initial database schema

Revision ID: 001
Revises: 
Create Date: 2026-10-17 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    # Create assessment table
    op.create_table(
        'assessment',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.CheckConstraint("type IN ('Reading', 'Writing')", name='ck_assessment_type'),
    )
    op.create_index(
        'uq_assessment_name_lower', 'assessment', [sa.text('lower(name)')], unique=True
    )

    # Create question table
    op.create_table(
        'question',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('assessment_id', sa.Integer(),
                  sa.ForeignKey('assessment.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_question_assessment_id', 'question', ['assessment_id'])
    op.create_index(
        'uq_question_assessment_text_lower', 'question',
        ['assessment_id', sa.text('lower(text)')], unique=True
    )

    # Create option table
    op.create_table(
        'option',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('is_correct', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('question_id', sa.Integer(),
                  sa.ForeignKey('question.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_option_question_id', 'option', ['question_id'])

    # Create passage table
    op.create_table(
        'passage',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('assessment_id', sa.Integer(),
                  sa.ForeignKey('assessment.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('assessment_id', name='uq_passage_assessment_id'),
    )

def downgrade():
    op.drop_table('passage')
    op.drop_table('option')
    op.drop_index('uq_question_assessment_text_lower', table_name='question')
    op.drop_table('question')
    op.drop_index('uq_assessment_name_lower', table_name='assessment')
    op.drop_table('assessment')
