"""
scriptkit/tty - 스크립트 실행 세션과 프로세스 실행기

- environment: 자식 프로세스 환경변수 정책
- executor: 외부 프로그램 실행 / 백그라운드 프로세스 관리
- printer: Rich 기반 터미널 출력
- preferences: YAML 사용자 설정
- session: 위 구성요소를 묶은 Tty 세션
"""
