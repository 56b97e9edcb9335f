"""
어댑터 레이어

외부 자원(SQLite DB, 계좌 서비스 REST API)과의 연동을 담당.
"""
