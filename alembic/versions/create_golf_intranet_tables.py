"""create golf intranet tables

Revision ID: 3a7c52e1b0d4
Revises:
Create Date: 2026-10-19 10:12:40

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a7c52e1b0d4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


user_type = sa.Enum('MANAGER', 'ADMIN', name='usertype')
golf_region = sa.Enum('경기북부', '경기남부', '충청도', '경상남도', '강원도', name='golf_region')
course_time_requirements = sa.Enum('조건없음', '인회필', '예변필', '인회필/예변필', name='course_time_requirements')
course_time_status = sa.Enum('미판매', '판매완료', '타업체마감', name='course_time_status')
join_type = sa.Enum('TRANSFER', 'MF', 'M', 'F', 'MM', 'FF', 'MMM', 'MMF', 'MFF', 'FFF', name='join_type')
join_person_status = sa.Enum(
    'PENDING_CONFIRM', 'CONFIRMING', 'CONFIRMED', 'REFUND_PENDING', 'REFUNDED', name='join_person_status'
)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('phone_number', sa.String(length=30), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('type', user_type, nullable=False),
        sa.Column('charge_rate', sa.Float(), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_phone_number', 'users', ['phone_number'])
    op.create_index('ix_users_is_deleted', 'users', ['is_deleted'])
    # 활성 사용자만 전화번호(로그인 ID) unique
    op.create_index(
        'uq_users_phone_number_active',
        'users',
        ['phone_number'],
        unique=True,
        postgresql_where=sa.text('is_deleted = false'),
        sqlite_where=sa.text('is_deleted = 0'),
    )

    op.create_table(
        'courses',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('region', golf_region, nullable=False),
        sa.Column('golf_club_name', sa.String(length=100), nullable=False),
        sa.Column('course_name', sa.String(length=100), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_courses_is_deleted', 'courses', ['is_deleted'])

    op.create_table(
        'site_ids',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('site_id', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('disabled', sa.Boolean(), nullable=False),
        sa.Column('hidden', sa.Boolean(), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_site_ids_is_deleted', 'site_ids', ['is_deleted'])

    op.create_table(
        'course_times',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('author_id', sa.Uuid(), nullable=True),
        sa.Column('course_id', sa.Uuid(), nullable=True),
        sa.Column('site_id', sa.Uuid(), nullable=True),
        sa.Column('reserved_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('reserved_name', sa.String(length=50), nullable=False),
        sa.Column('green_fee', sa.Integer(), nullable=False),
        sa.Column('charge_fee', sa.Integer(), nullable=False),
        sa.Column('requirements', course_time_requirements, nullable=False),
        sa.Column('flag', sa.Integer(), nullable=False),
        sa.Column('memo', sa.String(length=500), nullable=True),
        sa.Column('status', course_time_status, nullable=False),
        sa.Column('join_num', sa.Integer(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['users.id']),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id']),
        sa.ForeignKeyConstraint(['site_id'], ['site_ids.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_course_times_reserved_time', 'course_times', ['reserved_time'])
    op.create_index('ix_course_times_status', 'course_times', ['status'])

    op.create_table(
        'join_persons',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('time_id', sa.Uuid(), nullable=False),
        sa.Column('manager_id', sa.Uuid(), nullable=True),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('phone_number', sa.String(length=30), nullable=False),
        sa.Column('join_type', join_type, nullable=False),
        sa.Column('green_fee', sa.Integer(), nullable=False),
        sa.Column('charge_fee', sa.Integer(), nullable=False),
        sa.Column('charge_rate', sa.Float(), nullable=False),
        sa.Column('status', join_person_status, nullable=False),
        sa.Column('refund_reason', sa.String(length=255), nullable=True),
        sa.Column('refund_account', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['time_id'], ['course_times.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['manager_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_join_persons_time_id', 'join_persons', ['time_id'])
    op.create_index('ix_join_persons_manager_id', 'join_persons', ['manager_id'])

    op.create_table(
        'black_lists',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('author_id', sa.Uuid(), nullable=True),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('phone_number', sa.String(length=30), nullable=False),
        sa.Column('reason', sa.String(length=500), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_black_lists_phone_number', 'black_lists', ['phone_number'])
    op.create_index('ix_black_lists_is_deleted', 'black_lists', ['is_deleted'])


def downgrade() -> None:
    op.drop_table('black_lists')
    op.drop_index('ix_join_persons_manager_id', table_name='join_persons')
    op.drop_index('ix_join_persons_time_id', table_name='join_persons')
    op.drop_table('join_persons')
    op.drop_index('ix_course_times_status', table_name='course_times')
    op.drop_index('ix_course_times_reserved_time', table_name='course_times')
    op.drop_table('course_times')
    op.drop_table('site_ids')
    op.drop_table('courses')
    op.drop_index('uq_users_phone_number_active', table_name='users')
    op.drop_table('users')

    bind = op.get_bind()
    for enum in (join_person_status, join_type, course_time_status, course_time_requirements, golf_region, user_type):
        enum.drop(bind, checkfirst=True)
