from sqlmodel import Session

from career_digest.core.crypto import decrypt_json, encrypt_json
from career_digest.core.exceptions import (
    GitHubAPIError,
    GitHubNotConnectedError,
    NotFoundError,
    ValidationError,
)
from career_digest.core.logging import get_logger
from career_digest.domain.connection.schemas import (
    GITHUB_SERVICE,
    GitHubConfig,
    GitHubConnectionView,
    GitHubRepo,
)
from career_digest.domain.enums import ConnectionStatus
from career_digest.infra.db.models import ServiceConnection, utcnow
from career_digest.infra.db.repositories import ConnectionRepository
from career_digest.infra.github.client import get_authenticated_login, list_repositories

logger = get_logger(__name__)


def _read_config(connection: ServiceConnection) -> GitHubConfig:
    return GitHubConfig.model_validate(decrypt_json(connection.encrypted_config))


def _write_config(config: GitHubConfig) -> str:
    return encrypt_json(config.model_dump(by_alias=True))


def _require_connection(repository: ConnectionRepository, user_id: str) -> ServiceConnection:
    connection = repository.get(user_id, GITHUB_SERVICE)
    if connection is None:
        raise GitHubNotConnectedError()
    return connection


def load_active_github_config(session: Session, user_id: str) -> GitHubConfig | None:
    """수집용 설정 조회, active 연결이 없으면 None"""
    connection = ConnectionRepository(session).get(user_id, GITHUB_SERVICE)
    if connection is None or connection.status != ConnectionStatus.ACTIVE:
        return None
    return _read_config(connection)


def mark_synced(session: Session, user_id: str) -> None:
    repository = ConnectionRepository(session)
    connection = repository.get(user_id, GITHUB_SERVICE)
    if connection is not None:
        repository.update(connection, {"last_sync_at": utcnow()})


def get_github_connection(session: Session, user_id: str) -> GitHubConnectionView:
    connection = ConnectionRepository(session).get(user_id, GITHUB_SERVICE)
    if connection is None:
        return GitHubConnectionView(connected=False)

    config = _read_config(connection)
    return GitHubConnectionView(
        connected=connection.status == ConnectionStatus.ACTIVE,
        username=config.username,
        repos=config.repos,
    )


async def connect_github(session: Session, user_id: str, token: str) -> GitHubConnectionView:
    """토큰 검증 후 레포지토리 목록과 함께 암호화 저장 (사용자당 1건)

    재연결 시 기존 선택 상태는 같은 이름의 레포지토리에 이어진다.
    """
    try:
        username = await get_authenticated_login(token)
        full_names = await list_repositories(token)
    except GitHubAPIError as e:
        raise ValidationError(
            message="無効なトークンです。repo スコープが付与されているか確認してください。",
            detail=e.detail,
        ) from e

    repository = ConnectionRepository(session)
    connection = repository.get(user_id, GITHUB_SERVICE)

    previously_selected: set[str] = set()
    if connection is not None:
        previously_selected = set(_read_config(connection).selected_repos)

    config = GitHubConfig(
        token=token,
        username=username,
        repos=[
            GitHubRepo(full_name=name, selected=name in previously_selected)
            for name in full_names
        ],
    )

    if connection is None:
        connection = ServiceConnection(
            user_id=user_id,
            service=GITHUB_SERVICE,
            label=f"GitHub ({username})",
            encrypted_config=_write_config(config),
            status=ConnectionStatus.ACTIVE,
        )
        repository.save(connection)
    else:
        repository.update(
            connection,
            {
                "label": f"GitHub ({username})",
                "encrypted_config": _write_config(config),
                "status": ConnectionStatus.ACTIVE,
            },
        )

    logger.info("GitHub 연결 저장 username=%s repos=%d", username, len(config.repos))
    return GitHubConnectionView(connected=True, username=username, repos=config.repos)


def toggle_repository(session: Session, user_id: str, repo_full_name: str) -> GitHubRepo:
    """레포지토리 수집 대상 선택 토글"""
    repository = ConnectionRepository(session)
    connection = _require_connection(repository, user_id)
    config = _read_config(connection)

    target = next((r for r in config.repos if r.full_name == repo_full_name), None)
    if target is None:
        raise NotFoundError(message="リポジトリが見つかりません")

    target.selected = not target.selected
    repository.update(connection, {"encrypted_config": _write_config(config)})

    logger.info("레포지토리 선택 변경 repo=%s selected=%s", repo_full_name, target.selected)
    return target


async def verify_github_connection(session: Session, user_id: str) -> str:
    """저장된 토큰으로 인증 확인, 실패 시 연결 상태를 error로 변경

    Returns:
        인증된 GitHub login
    """
    repository = ConnectionRepository(session)
    connection = _require_connection(repository, user_id)
    config = _read_config(connection)

    try:
        username = await get_authenticated_login(config.token)
    except GitHubAPIError as e:
        repository.update(connection, {"status": ConnectionStatus.ERROR})
        logger.warning("GitHub 연결 테스트 실패, 상태 error 전환")
        raise ValidationError(
            message="GitHubへの接続に失敗しました。トークンを確認してください。",
            detail=e.detail,
        ) from e

    if connection.status != ConnectionStatus.ACTIVE:
        repository.update(connection, {"status": ConnectionStatus.ACTIVE})
    return username
