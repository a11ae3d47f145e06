# status_drafter/services/exceptions.py

# --- Constraint Exceptions (HTTP 400) ---
class ConstraintViolationError(Exception):
    """저장소 제약 조건을 위반했을 때"""
    pass

class DuplicateProjectNameError(ConstraintViolationError):
    """동일한 이름의 프로젝트가 이미 존재할 때"""
    pass

class InvalidProjectError(ConstraintViolationError):
    """존재하지 않는 프로젝트에 역할을 만들려고 할 때"""
    pass

# --- External Service Exceptions (HTTP 500) ---
class EnhancementError(Exception):
    """AI Enhance 제공자 호출 실패, 잘못된 응답, JSON이 아닌 응답일 때"""
    pass
