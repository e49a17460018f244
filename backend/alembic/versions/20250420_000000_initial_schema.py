"""initial schema: users, medical centers, specialties, doctors, appointments

Revision ID: 20250420000000
Revises:
Create Date: 2025-04-20 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20250420000000'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('dni', sa.String(length=10), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column(
            'role',
            sa.Enum('admin', 'doctor', 'patient', name='user_role', native_enum=False, length=20),
            nullable=False,
        ),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.UniqueConstraint('dni'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_users_id', 'users', ['id'])

    op.create_table(
        'medical_centers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column(
            'city',
            sa.Enum('Quito', 'Guayaquil', 'Cuenca', name='city', native_enum=False, length=20),
            nullable=False,
        ),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index('ix_medical_centers_id', 'medical_centers', ['id'])

    op.create_table(
        'specialties',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'doctors',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('medical_center_id', sa.Integer(), sa.ForeignKey('medical_centers.id'), nullable=False),
        sa.Column('specialty_id', sa.Integer(), sa.ForeignKey('specialties.id'), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index('ix_doctors_id', 'doctors', ['id'])

    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('patient_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('doctor_id', sa.Integer(), sa.ForeignKey('doctors.id'), nullable=False),
        sa.Column('appointment_date', sa.Date(), nullable=False),
        sa.Column('appointment_time', sa.Time(), nullable=False),
        sa.Column(
            'status',
            sa.Enum('pending', 'completed', 'cancelled', name='appointment_status', native_enum=False, length=20),
            nullable=False,
            server_default='pending',
        ),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False),
        # One booking per exact slot; closes the check-then-insert race in AppointmentService.create
        sa.UniqueConstraint('doctor_id', 'appointment_date', 'appointment_time', name='uq_doctor_appointment_slot'),
    )
    op.create_index('ix_appointments_id', 'appointments', ['id'])
    op.create_index('idx_patient', 'appointments', ['patient_id'])
    op.create_index('idx_doctor_date', 'appointments', ['doctor_id', 'appointment_date'])


def downgrade() -> None:
    op.drop_index('idx_doctor_date', table_name='appointments')
    op.drop_index('idx_patient', table_name='appointments')
    op.drop_index('ix_appointments_id', table_name='appointments')
    op.drop_table('appointments')
    op.drop_index('ix_doctors_id', table_name='doctors')
    op.drop_table('doctors')
    op.drop_table('specialties')
    op.drop_index('ix_medical_centers_id', table_name='medical_centers')
    op.drop_table('medical_centers')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
