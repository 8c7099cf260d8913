"""명령어 인자 prefix 정의.

입력 예: ``delete -mem/ -i/2``, ``del -txn/ -id/10001100001``
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Prefix:
    value: str

    def __str__(self) -> str:
        return self.value


PREFIX_MEMBER = Prefix("-mem/")
PREFIX_TRANSACTION = Prefix("-txn/")
PREFIX_RESERVATION = Prefix("-rs/")
PREFIX_ID = Prefix("-id/")
PREFIX_INDEX = Prefix("-i/")
PREFIX_NAME = Prefix("-n/")
PREFIX_PHONE = Prefix("-p/")
PREFIX_EMAIL = Prefix("-e/")
PREFIX_ADDRESS = Prefix("-a/")
PREFIX_CREDIT = Prefix("-c/")
PREFIX_REDEEM = Prefix("-rd/")
PREFIX_BILLING = Prefix("-b/")
PREFIX_DATE_TIME = Prefix("-dt/")
PREFIX_REMARK = Prefix("-rm/")
PREFIX_TAG = Prefix("-tag/")

# sort 명령어에서만 사용한다 (-a/, -d/ 가 다른 의미로 쓰임)
PREFIX_ASC = Prefix("-a/")
PREFIX_DESC = Prefix("-d/")
