"""Initial schema

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-15 09:20:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create source_files table
    op.create_table(
        'source_files',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=1024), nullable=False),
        sa.Column('language', sa.String(length=50), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('size', sa.Integer(), server_default='0'),
        sa.Column('user_id', sa.String(length=64)),
        sa.Column('session_id', sa.String(length=64)),
        sa.Column('dependencies', sa.JSON()),
        sa.Column('exports', sa.JSON()),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_source_files_session_id', 'source_files', ['session_id'])
    op.create_index('idx_source_files_user_id', 'source_files', ['user_id'])
    op.create_index('idx_source_files_uploaded_at', 'source_files', ['uploaded_at'])

    # Create fragments table
    op.create_table(
        'fragments',
        sa.Column('pk', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('file_id', sa.String(length=64), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('fragment_id', sa.String(length=64), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('start_line', sa.Integer(), nullable=False),
        sa.Column('end_line', sa.Integer(), nullable=False),
        sa.Column('kind', sa.String(length=20), nullable=False, server_default='other'),
        sa.Column('embedding', sa.JSON()),
        sa.ForeignKeyConstraint(['file_id'], ['source_files.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('pk')
    )
    op.create_index('idx_fragments_file_id', 'fragments', ['file_id'])


def downgrade() -> None:
    op.drop_index('idx_fragments_file_id', table_name='fragments')
    op.drop_table('fragments')

    op.drop_index('idx_source_files_uploaded_at', table_name='source_files')
    op.drop_index('idx_source_files_user_id', table_name='source_files')
    op.drop_index('idx_source_files_session_id', table_name='source_files')
    op.drop_table('source_files')
