"""init_db_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- user: User accounts (user/admin)
- movie: Movie catalog
- showtime: Screenings of a movie with a fixed seat capacity
- reservation: Reservation records with UUID7 primary key, never deleted
- reservation_seat: Seat history of each reservation (request order kept)
- held_seat: Seat ledger, one row per seat held by an ACTIVE reservation
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    op.create_table(
        'movie',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('poster_image_url', sa.String(length=1024), nullable=True),
        sa.Column('genre', sa.String(length=100), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_movie_genre'), 'movie', ['genre'])

    op.create_table(
        'showtime',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint('capacity >= 1', name='ck_showtime_capacity_positive'),
        sa.CheckConstraint('end_time > start_time', name='ck_showtime_end_after_start'),
        sa.ForeignKeyConstraint(['movie_id'], ['movie.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_showtime_movie_id'), 'showtime', ['movie_id'])
    op.create_index(op.f('ix_showtime_start_time'), 'showtime', ['start_time'])

    op.create_table(
        'reservation',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('showtime_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['showtime_id'], ['showtime.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_reservation_user_id'), 'reservation', ['user_id'])
    op.create_index(op.f('ix_reservation_showtime_id'), 'reservation', ['showtime_id'])

    op.create_table(
        'reservation_seat',
        sa.Column('reservation_id', sa.Uuid(), nullable=False),
        sa.Column('seat_number', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['reservation_id'], ['reservation.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('reservation_id', 'seat_number'),
    )

    op.create_table(
        'held_seat',
        sa.Column('showtime_id', sa.Integer(), nullable=False),
        sa.Column('seat_number', sa.Integer(), nullable=False),
        sa.Column('reservation_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['showtime_id'], ['showtime.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['reservation_id'], ['reservation.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('showtime_id', 'seat_number'),
    )
    op.create_index(op.f('ix_held_seat_reservation_id'), 'held_seat', ['reservation_id'])


def downgrade() -> None:
    op.drop_index(op.f('ix_held_seat_reservation_id'), table_name='held_seat')
    op.drop_table('held_seat')
    op.drop_table('reservation_seat')
    op.drop_index(op.f('ix_reservation_showtime_id'), table_name='reservation')
    op.drop_index(op.f('ix_reservation_user_id'), table_name='reservation')
    op.drop_table('reservation')
    op.drop_index(op.f('ix_showtime_start_time'), table_name='showtime')
    op.drop_index(op.f('ix_showtime_movie_id'), table_name='showtime')
    op.drop_table('showtime')
    op.drop_index(op.f('ix_movie_genre'), table_name='movie')
    op.drop_table('movie')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')
