# status_drafter/app.py
from wsgiref.simple_server import make_server
from urllib.parse import parse_qs
import json
import logging
import re

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from status_drafter.config import settings
from status_drafter.database.database import SessionLocal
from status_drafter.database.db_init import initialize_db
from status_drafter.repositories.sqlalchemy import (
    SqlalchemyProjectRepository, SqlalchemyRoleRepository, SqlalchemyDraftRepository
)
from status_drafter.services.project_service import ProjectService
from status_drafter.services.draft_service import DraftService
from status_drafter.services.enhance_service import EnhanceService
from status_drafter.services.exceptions import ConstraintViolationError, EnhancementError

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
## 요청 처리 유틸리티 함수
# --------------------------------------------------------------------------

def get_request_data(environ):
    try:
        content_length = int(environ.get("CONTENT_LENGTH") or 0)
        data = json.loads(environ["wsgi.input"].read(content_length)) if content_length > 0 else {}
    except (ValueError, json.JSONDecodeError):
        raise ValueError("Invalid or missing JSON body.")
    if not isinstance(data, dict):
        raise ValueError("JSON body must be an object.")
    return data

def get_query_param(environ, name, default=None):
    values = parse_qs(environ.get("QUERY_STRING", "")).get(name)
    return values[0] if values else default

def success(data=None):
    body = {"message": "success"}
    if data is not None:
        body["data"] = data
    return '200 OK', json.dumps(body)

def handle_exception(e):
    if isinstance(e, EnhancementError):
        return "500 Internal Server Error", json.dumps({"error": "Failed to enhance text", "details": str(e)})
    if isinstance(e, IntegrityError):
        return "400 Bad Request", json.dumps({"error": str(e.orig)})
    if isinstance(e, (ConstraintViolationError, ValueError, SQLAlchemyError)):
        return "400 Bad Request", json.dumps({"error": str(e)})
    logger.exception("Unhandled error while processing request")
    return "500 Internal Server Error", json.dumps({"error": str(e)})

# --------------------------------------------------------------------------
## 핸들러 함수
# --------------------------------------------------------------------------

def list_drafts_handler(environ, *args):
    drafts = environ['services']['drafts'].list_drafts(get_query_param(environ, "limit"))
    return success(drafts)

def create_draft_handler(environ, *args):
    data = get_request_data(environ)
    draft = environ['services']['drafts'].create_draft(
        data.get('type'), data.get('content'), data.get('project_id'), data.get('role_id')
    )
    return success(draft)

def delete_draft_handler(environ, draft_id):
    changes = environ['services']['drafts'].delete_draft(int(draft_id))
    return '200 OK', json.dumps({"message": "deleted", "changes": changes})

def list_projects_handler(environ, *args):
    return success(environ['services']['projects'].list_projects())

def create_project_handler(environ, *args):
    data = get_request_data(environ)
    return success(environ['services']['projects'].create_project(data.get('name')))

def delete_project_handler(environ, project_id):
    environ['services']['projects'].delete_project(int(project_id))
    return '200 OK', json.dumps({"message": "deleted"})

def list_roles_handler(environ, project_id):
    return success(environ['services']['projects'].list_roles(int(project_id)))

def create_role_handler(environ, *args):
    data = get_request_data(environ)
    return success(environ['services']['projects'].create_role(data.get('name'), data.get('project_id')))

def delete_role_handler(environ, role_id):
    environ['services']['projects'].delete_role(int(role_id))
    return '200 OK', json.dumps({"message": "deleted"})

def enhance_handler(environ, *args):
    fields = get_request_data(environ).get('fields')
    if not isinstance(fields, dict):
        return '400 Bad Request', json.dumps({"error": "Fields object is required"})
    enhanced = environ['services']['enhance'].enhance_fields(fields)
    return '200 OK', json.dumps({"enhanced": enhanced})

ROUTES = [
    ('GET', r'^/api/drafts$', list_drafts_handler),
    ('POST', r'^/api/drafts$', create_draft_handler),
    ('DELETE', r'^/api/drafts/([0-9]+)$', delete_draft_handler),
    ('GET', r'^/api/projects$', list_projects_handler),
    ('POST', r'^/api/projects$', create_project_handler),
    ('DELETE', r'^/api/projects/([0-9]+)$', delete_project_handler),
    ('GET', r'^/api/projects/([0-9]+)/roles$', list_roles_handler),
    ('POST', r'^/api/roles$', create_role_handler),
    ('DELETE', r'^/api/roles/([0-9]+)$', delete_role_handler),
    ('POST', r'^/api/enhance$', enhance_handler),
]

# --------------------------------------------------------------------------
## WSGI 애플리케이션 (의존성 주입 및 라우팅)
# --------------------------------------------------------------------------

def create_app(session_factory=SessionLocal, enhance_service=None, cors_origin=None):
    """
    WSGI 애플리케이션을 생성합니다.

    요청마다 새 DB 세션을 열고 리포지토리 -> 서비스를 조립한 뒤 핸들러에 넘깁니다.
    EnhanceService는 HTTP 클라이언트를 재사용하기 위해 앱 단위로 한 번만 만듭니다.
    """
    enhance_service = enhance_service or EnhanceService()
    cors_headers = [
        ("Access-Control-Allow-Origin", cors_origin or settings.cors_origin),
        ("Access-Control-Allow-Methods", "GET, POST, DELETE, OPTIONS"),
        ("Access-Control-Allow-Headers", "Content-Type"),
    ]

    def application(environ, start_response):
        path = environ.get("PATH_INFO", "")
        method = environ.get("REQUEST_METHOD", "")

        if method == "OPTIONS":
            start_response("204 No Content", cors_headers)
            return [b""]

        db_session = session_factory()
        try:
            # 1. 의존성 생성 (Repositories -> Services)
            project_service = ProjectService(SqlalchemyProjectRepository(db_session), SqlalchemyRoleRepository(db_session))
            draft_service = DraftService(SqlalchemyDraftRepository(db_session))

            # 2. 생성된 서비스 객체들을 environ을 통해 핸들러에 전달
            environ['services'] = {
                'projects': project_service,
                'drafts': draft_service,
                'enhance': enhance_service,
            }

            # 3. 라우팅 및 핸들러 실행
            handler, path_args = None, []
            for route_method, pattern, route_handler in ROUTES:
                if method == route_method and (match := re.match(pattern, path)):
                    handler, path_args = route_handler, match.groups()
                    break

            if handler:
                status, response_body = handler(environ, *path_args)
            else:
                status, response_body = '404 Not Found', json.dumps({'error': 'Not Found'})

        except Exception as e:
            db_session.rollback()
            status, response_body = handle_exception(e)
        finally:
            db_session.close()

        start_response(status, [("Content-Type", "application/json")] + cors_headers)
        return [response_body.encode("utf-8")]

    return application

# --------------------------------------------------------------------------
## 서버 실행
# --------------------------------------------------------------------------

def main():
    logging.basicConfig(level=settings.log_level.upper())
    initialize_db()
    application = create_app()
    with make_server(settings.host, settings.port, application) as httpd:
        logger.info("Status Drafter API running on http://localhost:%d", settings.port)
        httpd.serve_forever()


if __name__ == "__main__":
    main()
