"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- accounts: 계좌 / 입출금 / 변동 기록
- payments: 공과금 납부
"""
