# fixparts/utils/barcode.py

import base64
import secrets
from datetime import datetime, UTC
from typing import Optional


def generate_barcode(
    category_id: Optional[int] = None,
    supplier_id: Optional[int] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    품목 바코드 문자열을 생성합니다.

    - 카테고리/공급업체 ID가 없으면 0으로 채웁니다.
    - 무작위 부분은 암호학적으로 안전한 난수 6바이트를 Base32로 인코딩한 앞 8자입니다.
    - 생성된 값의 고유성은 호출 측(ItemService)이 저장소 조회로 확인합니다.

    Args:
        category_id (Optional[int]): 품목의 카테고리 ID
        supplier_id (Optional[int]): 품목의 공급업체 ID
        now (Optional[datetime]): 타임스탬프 기준 시각 (기본값: 현재 UTC 시각)

    Returns:
        str: 예) "C003-S012-250114093015-K7QX2M4A"
    """
    timestamp = (now or datetime.now(UTC)).strftime("%y%m%d%H%M%S")
    random_part = base64.b32encode(secrets.token_bytes(6)).decode("ascii")[:8]
    return f"C{category_id or 0:03d}-S{supplier_id or 0:03d}-{timestamp}-{random_part}"
