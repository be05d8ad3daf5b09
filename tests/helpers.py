# tests/helpers.py
import uuid
from datetime import datetime

from sqlalchemy.orm import Session

from golf_intranet.models.course_time import CourseTime
from golf_intranet.models.user import User, UserType
from golf_intranet.core.security import get_password_hash


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def random_phone() -> str:
    digits = str(uuid.uuid4().int)[:8]
    return f"010-{digits[:4]}-{digits[4:]}"


def create_user_in_db(
    db: Session,
    *,
    phone_number: str,
    password: str,
    type: UserType = UserType.MANAGER,
    name: str = "테스트매니저",
    charge_rate: float = 0.0,
) -> User:
    user = User(
        phone_number=phone_number,
        password_hash=get_password_hash(password),
        name=name,
        type=type,
        charge_rate=charge_rate,
        is_deleted=False,
        deleted_at=None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def login(client, phone_number: str, password: str) -> str:
    res = client.post("/auth/login", json={"phone_number": phone_number, "password": password})
    assert res.status_code == 200, res.text
    return res.json()["access_token"]


def setup_admin_and_manager(client, db: Session):
    """
    ADMIN 토큰 + MANAGER(user_id, token) 세팅
    """
    admin_phone = random_phone()
    admin_password = "AdminPassw0rd!"
    admin = create_user_in_db(
        db, phone_number=admin_phone, password=admin_password, type=UserType.ADMIN, name="관리자"
    )

    manager_phone = random_phone()
    manager_password = "ManagerPassw0rd!"
    manager = create_user_in_db(
        db, phone_number=manager_phone, password=manager_password, charge_rate=10.0
    )

    return {
        "admin_id": str(admin.id),
        "admin_phone": admin_phone,
        "admin_password": admin_password,
        "admin_token": login(client, admin_phone, admin_password),
        "manager_id": str(manager.id),
        "manager_phone": manager_phone,
        "manager_password": manager_password,
        "manager_token": login(client, manager_phone, manager_password),
    }


def create_course_time_in_db(
    db: Session,
    *,
    author_id=None,
    reserved_time: datetime = datetime(2026, 10, 20, 7, 30),
    green_fee: int = 180000,
    charge_fee: int = 20000,
) -> CourseTime:
    course_time = CourseTime(
        author_id=author_id,
        reserved_time=reserved_time,
        reserved_name="홍길동",
        green_fee=green_fee,
        charge_fee=charge_fee,
    )
    db.add(course_time)
    db.commit()
    db.refresh(course_time)
    return course_time


def get_course_time(db: Session, time_id) -> CourseTime:
    db.expire_all()
    return db.get(CourseTime, uuid.UUID(str(time_id)))
