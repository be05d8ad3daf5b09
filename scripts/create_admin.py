"""

관리자(ADMIN) 초기 계정 생성 스크립트.

- 서버 최초 세팅 시 단 한 번 실행하는 용도
- .env에 정의된 ADMIN_* 환경 변수를 읽어
  관리자 계정을 생성한다.
- 이미 활성 관리자 계정이 존재하면 생성하지 않고 종료한다.

인트라넷은 회원가입이 없으므로,
첫 관리자 계정은 이 스크립트로만 만들 수 있다.

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.create_admin

"""

import os
from dotenv import load_dotenv
load_dotenv()

from golf_intranet.db.session import SessionLocal
from golf_intranet.models.user import User, UserType
from golf_intranet.core.security import get_password_hash
from golf_intranet.services.admin import count_admins, get_active_user_by_phone


def main():
    db = SessionLocal()
    try:
        if count_admins(db) > 0:
            print("ADMIN already exists. Skip creation.")
            return

        phone_number = os.environ["ADMIN_PHONE_NUMBER"]
        password = os.environ["ADMIN_PASSWORD"]
        name = os.environ.get("ADMIN_NAME", "관리자")

        if get_active_user_by_phone(db, phone_number):
            raise RuntimeError("Phone number already exists but is not ADMIN")

        user = User(
            phone_number=phone_number,
            password_hash=get_password_hash(password),
            name=name,
            type=UserType.ADMIN,
        )

        db.add(user)
        db.commit()

        print(f"ADMIN created: {phone_number}")

    finally:
        db.close()


if __name__ == "__main__":
    main()
