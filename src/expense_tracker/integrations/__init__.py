"""
목적: 외부 연동 모듈 패키지를 정의한다.
설명: 로그 저장에 사용하는 문서 저장소 연동을 포함한다.
디자인 패턴: 퍼사드
참조: src/expense_tracker/integrations/db
"""
