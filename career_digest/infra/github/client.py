import re

import httpx

from career_digest.core.config import settings
from career_digest.core.exceptions import GitHubAPIError
from career_digest.core.logging import get_logger
from career_digest.domain.digest.schemas import RawActivity, RepoActivityResult
from career_digest.domain.enums import ActivityType

logger = get_logger(__name__)

GITHUB_API_BASE = "https://api.github.com"

REPO_FULL_NAME_PATTERN = re.compile(r"^([a-zA-Z0-9_.-]+)/([a-zA-Z0-9_.-]+)$")

_client = httpx.AsyncClient(timeout=settings.github_timeout)

# 페이지 상한 때문에 일부 검색 결과를 보지 못한 카테고리
TRUNCATED_ERROR = "truncated"

# (활동 목록, 검색 결과 잘림 여부)
CategoryActivities = tuple[list[RawActivity], bool]


def _get_headers(token: str | None = None) -> dict[str, str]:
    """GitHub API 요청 헤더 생성

    Args:
        token: GitHub 개인 액세스 토큰

    Returns:
        HTTP 헤더 딕셔너리
    """
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def close_client():
    """httpx 클라이언트 종료"""
    await _client.aclose()


def parse_repo_full_name(full_name: str) -> tuple[str, str]:
    """"owner/repo" 문자열 분리

    Raises:
        ValueError: 형식이 맞지 않는 경우
    """
    match = REPO_FULL_NAME_PATTERN.match(full_name.strip())
    if not match:
        raise ValueError(f"유효하지 않은 레포지토리 이름: {full_name}")
    return match.group(1), match.group(2)


def day_window(date: str) -> tuple[str, str]:
    """YYYY-MM-DD를 UTC 하루 구간으로 변환"""
    return f"{date}T00:00:00Z", f"{date}T23:59:59Z"


async def get_authenticated_login(token: str) -> str:
    """토큰 소유 계정의 login 조회

    Raises:
        GitHubAPIError: 인증 실패 또는 API 오류
    """
    try:
        response = await _client.get(f"{GITHUB_API_BASE}/user", headers=_get_headers(token))
        response.raise_for_status()
        login = response.json()["login"]
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        logger.warning("GitHub 인증 실패 status=%d", status_code)
        raise GitHubAPIError(
            message="GitHubの認証に失敗しました。トークンを確認してください。",
            detail=f"HTTP {status_code}",
        ) from e
    except (httpx.RequestError, KeyError) as e:
        logger.warning("GitHub 인증 요청 실패 error=%s", type(e).__name__)
        raise GitHubAPIError(detail=type(e).__name__) from e

    logger.info("GitHub 인증 완료 login=%s", login)
    return login


async def list_repositories(token: str, per_page: int = 100) -> list[str]:
    """토큰 소유 계정이 접근 가능한 레포지토리 목록 (최근 갱신순)

    Returns:
        "owner/repo" 리스트
    """
    url = f"{GITHUB_API_BASE}/user/repos"
    params = {"sort": "updated", "per_page": min(per_page, 100)}

    try:
        response = await _client.get(url, headers=_get_headers(token), params=params)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("레포지토리 목록 조회 실패 error=%s", type(e).__name__)
        raise GitHubAPIError(detail=type(e).__name__) from e

    repos = [repo["full_name"] for repo in response.json()]
    logger.info("레포지토리 목록 조회 완료 count=%d", len(repos))
    return repos


async def _search_issues(query: str, token: str) -> tuple[list[dict], bool]:
    """검색 API 페이지네이션 조회 (최대 github_search_max_pages 페이지)

    Returns:
        (items, truncated) - 페이지 상한에 걸려 total_count보다 적게 받았으면 truncated=True
    """
    url = f"{GITHUB_API_BASE}/search/issues"
    per_page = settings.github_search_per_page
    items: list[dict] = []
    total_count = 0

    for page in range(1, settings.github_search_max_pages + 1):
        params = {
            "q": query,
            "per_page": per_page,
            "page": page,
            "sort": "updated",
            "order": "desc",
        }
        response = await _client.get(url, headers=_get_headers(token), params=params)
        response.raise_for_status()
        data = response.json()

        page_items = data.get("items", [])
        total_count = data.get("total_count", 0)
        items.extend(page_items)
        if len(page_items) < per_page or len(items) >= total_count:
            return items, False

    truncated = len(items) < total_count
    if truncated:
        logger.warning(
            "검색 결과 페이지 상한 도달 fetched=%d total_count=%d", len(items), total_count
        )
    return items, truncated


def _label_names(item: dict) -> list[str]:
    return [
        label if isinstance(label, str) else label.get("name", "")
        for label in item.get("labels", [])
    ]


async def collect_merged_prs(
    owner: str, repo: str, username: str, date: str, token: str
) -> CategoryActivities:
    """해당 일자에 머지된 본인 작성 PR"""
    since, until = day_window(date)
    query = f"repo:{owner}/{repo} type:pr author:{username} is:merged merged:{since}..{until}"
    items, truncated = await _search_issues(query, token)

    activities = [
        RawActivity(
            activity_type=ActivityType.PR_MERGED,
            title=item["title"],
            body=item.get("body") or "",
            external_url=item["html_url"],
            metadata={
                "number": item["number"],
                "repo": f"{owner}/{repo}",
                "labels": _label_names(item),
            },
        )
        for item in items
    ]
    return activities, truncated


async def _list_reviews(owner: str, repo: str, pull_number: int, token: str) -> list[dict]:
    url = f"{GITHUB_API_BASE}/repos/{owner}/{repo}/pulls/{pull_number}/reviews"
    response = await _client.get(url, headers=_get_headers(token), params={"per_page": 100})
    response.raise_for_status()
    return response.json()


async def collect_reviewed_prs(
    owner: str, repo: str, username: str, date: str, token: str
) -> CategoryActivities:
    """해당 일자에 본인이 리뷰를 제출한 타인 PR

    리뷰 목록 조회에 실패한 PR은 건너뛴다.
    """
    since, until = day_window(date)
    query = f"repo:{owner}/{repo} type:pr reviewed-by:{username} -author:{username} updated:>={since}"
    items, truncated = await _search_issues(query, token)

    reviewed = []
    for item in items:
        try:
            reviews = await _list_reviews(owner, repo, item["number"], token)
        except httpx.HTTPError as e:
            logger.warning(
                "리뷰 조회 실패, PR 건너뜀 repo=%s/%s pr=%d error=%s",
                owner,
                repo,
                item["number"],
                type(e).__name__,
            )
            continue

        user_reviews = [
            r
            for r in reviews
            if (r.get("user") or {}).get("login") == username
            and r.get("submitted_at")
            and since <= r["submitted_at"] <= until
        ]
        if not user_reviews:
            continue

        reviewed.append(
            RawActivity(
                activity_type=ActivityType.PR_REVIEWED,
                title=f"Review: {item['title']}",
                body="\n".join(r.get("body") or "" for r in user_reviews).strip(),
                external_url=item["html_url"],
                metadata={
                    "number": item["number"],
                    "repo": f"{owner}/{repo}",
                    "review_count": len(user_reviews),
                    "states": [r.get("state") for r in user_reviews],
                },
            )
        )

    return reviewed, truncated


async def collect_closed_issues(
    owner: str, repo: str, username: str, date: str, token: str
) -> CategoryActivities:
    """해당 일자에 닫힌 본인 담당 이슈 (PR 제외)"""
    since, until = day_window(date)
    query = f"repo:{owner}/{repo} type:issue assignee:{username} is:closed closed:{since}..{until}"
    items, truncated = await _search_issues(query, token)

    activities = [
        RawActivity(
            activity_type=ActivityType.ISSUE_CLOSED,
            title=item["title"],
            body=item.get("body") or "",
            external_url=item["html_url"],
            metadata={
                "number": item["number"],
                "repo": f"{owner}/{repo}",
                "labels": _label_names(item),
            },
        )
        for item in items
        if not item.get("pull_request")
    ]
    return activities, truncated


CATEGORY_COLLECTORS = (
    (ActivityType.PR_MERGED, collect_merged_prs),
    (ActivityType.PR_REVIEWED, collect_reviewed_prs),
    (ActivityType.ISSUE_CLOSED, collect_closed_issues),
)


async def collect_github_activities(
    token: str, repos: list[str], date: str
) -> list[RepoActivityResult]:
    """레포지토리별, 카테고리별 하루치 활동 수집

    레포지토리/카테고리 단위 실패는 error가 채워진 결과로 반환되며
    나머지 수집은 계속된다. 인증 실패만 전체를 중단한다.
    검색 페이지 상한으로 결과가 잘린 카테고리는 받은 활동과 함께
    error="truncated"로 표시된다.

    Args:
        token: GitHub 개인 액세스 토큰
        repos: "owner/repo" 리스트
        date: YYYY-MM-DD (UTC)

    Returns:
        수집 순서(레포 순 x 카테고리 순)대로의 결과 리스트
    """
    username = await get_authenticated_login(token)
    results: list[RepoActivityResult] = []

    for full_name in repos:
        try:
            owner, repo = parse_repo_full_name(full_name)
        except ValueError as e:
            logger.warning("레포지토리 이름 오류 repo=%s", full_name)
            results.extend(
                RepoActivityResult(repo=full_name, category=category, error=str(e))
                for category, _ in CATEGORY_COLLECTORS
            )
            continue

        for category, collector in CATEGORY_COLLECTORS:
            try:
                activities, truncated = await collector(owner, repo, username, date, token)
            except (httpx.HTTPError, KeyError, ValueError) as e:
                logger.warning(
                    "활동 수집 실패 repo=%s category=%s error=%s",
                    full_name,
                    category.value,
                    type(e).__name__,
                )
                results.append(
                    RepoActivityResult(repo=full_name, category=category, error=type(e).__name__)
                )
                continue

            # 받은 활동은 쓰되 잘린 사실은 경고로 남긴다
            results.append(
                RepoActivityResult(
                    repo=full_name,
                    category=category,
                    activities=activities,
                    error=TRUNCATED_ERROR if truncated else None,
                )
            )

    total = sum(len(r.activities) for r in results)
    failed = sum(1 for r in results if not r.ok)
    logger.info(
        "GitHub 활동 수집 완료 repos=%d activities=%d failed=%d", len(repos), total, failed
    )
    return results


def flatten_activities(results: list[RepoActivityResult]) -> list[RawActivity]:
    return [activity for result in results for activity in result.activities]


def failed_results(results: list[RepoActivityResult]) -> list[RepoActivityResult]:
    return [result for result in results if not result.ok]
