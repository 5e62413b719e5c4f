import enum
import logging
import random
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import requests
from dotenv import load_dotenv

from headlinebot.config import BotConfig
from headlinebot.errors import BotError
from headlinebot.models import Candidate
from headlinebot.pipeline import build_candidates
from headlinebot.publisher import build_publisher
from headlinebot.selector import choose
from headlinebot.sentiment import build_scorer
from headlinebot.sources import build_sources, fetch_all
from headlinebot.store import POSTED_TITLES, RECENT_KEYWORDS, ListStore, bounded
from headlinebot.text import normalize_title

logger = logging.getLogger(__name__)


class RunState(enum.Enum):
    INIT = 'Init'
    LOADED = 'Loaded'
    FETCHED = 'Fetched'
    FILTERED = 'Filtered'
    NO_CANDIDATES = 'NoCandidates'
    SELECTED = 'Selected'
    PUBLISHED = 'Published'
    PERSISTED = 'Persisted'
    DONE = 'Done'
    ERROR = 'Error'


@dataclass
class RunResult:
    state: RunState
    chosen: Optional[Candidate] = None
    post_uri: Optional[str] = None
    candidates: int = 0


def _enter(state):
    logger.debug(f"State -> {state.value}")
    return state


def run(config, sources, scorer, publisher, store, rng=random, now=None):
    """One fetch -> filter -> pick -> publish -> persist cycle.

    State is written only after the publisher confirms the post; any
    exception from the publisher propagates with both lists untouched.
    """
    now = now or datetime.now(timezone.utc)
    _enter(RunState.INIT)

    posted_titles = store.load(POSTED_TITLES)
    recent_keywords = store.load(RECENT_KEYWORDS)
    logger.info(f"Loaded {len(posted_titles)} posted titles and {len(recent_keywords)} recent keywords")
    _enter(RunState.LOADED)

    batches = fetch_all(sources, max_workers=config.fetch_workers)
    _enter(RunState.FETCHED)

    candidates = build_candidates(batches, posted_titles, recent_keywords, config, scorer, now=now)
    _enter(RunState.FILTERED)
    if not candidates:
        logger.info("No new positive articles found to post.")
        return RunResult(_enter(RunState.NO_CANDIDATES))

    chosen = choose(candidates, rng)
    _enter(RunState.SELECTED)
    logger.info(f"Selected from {len(candidates)} candidates: {chosen.title} | Keywords: {', '.join(chosen.keywords)}")

    post_uri = publisher.publish(chosen)
    _enter(RunState.PUBLISHED)

    posted_titles.append(normalize_title(chosen.title))
    recent_keywords.extend(chosen.keywords)
    store.save_all({
        POSTED_TITLES: bounded(posted_titles, config.max_posted_titles),
        RECENT_KEYWORDS: bounded(recent_keywords, config.recent_keywords_limit),
    })
    _enter(RunState.PERSISTED)

    logger.info(f"Successfully posted: {chosen.title}")
    return RunResult(_enter(RunState.DONE), chosen=chosen, post_uri=post_uri, candidates=len(candidates))


def setup_logging(level='INFO'):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='[%(levelname)s] %(asctime)s %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def main():
    load_dotenv()
    try:
        config = BotConfig.from_env()
    except BotError as e:
        setup_logging()
        logger.error(str(e))
        return 1
    setup_logging(config.log_level)

    session = requests.Session()
    session.headers.update(config.request_headers)
    try:
        result = run(
            config,
            build_sources(config, session=session),
            build_scorer(config, session=session),
            build_publisher(config, session=session),
            ListStore(config.state_dir),
        )
    except BotError as e:
        logger.error(f"{RunState.ERROR.value}: {e}")
        return 1
    except Exception:
        logger.exception(f"{RunState.ERROR.value}: unexpected failure")
        return 1
    finally:
        session.close()
    return 0 if result.state in (RunState.DONE, RunState.NO_CANDIDATES) else 1


if __name__ == "__main__":
    sys.exit(main())
