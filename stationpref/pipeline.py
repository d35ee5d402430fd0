"""
Concurrent batch resolution.

Jobs are fanned out to a fixed pool of worker threads through a JobQueue and
fanned back in through a ResultChannel. Workers complete in any order; the
collector scatters every Result into the slot named by its index, so output
order always equals input order.

Invariant:
A batch of M records yields exactly M Results, one per index in [0, M).
"""

import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Iterator, List, Optional, Protocol, Sequence

from .env import DEFAULT_WORKERS
from .errors import PipelineError, ResolverError
from .logger import get_logger
from .models import BatchResult, Job, Outcome, Result, StationCandidate
from .names import first_field, parse_station_field

_CLOSED = object()


class Resolver(Protocol):
    def lookup_station(self, name: str) -> List[StationCandidate]: ...

    def lookup_address(self, postal_code: str) -> str: ...


class JobQueue:
    """Fixed-capacity ordered buffer of jobs, closed once every job is in."""

    def __init__(self, capacity: int):
        # One extra slot for the close marker
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=capacity + 1)
        self._capacity = capacity
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, job: Job) -> None:
        with self._lock:
            if self._closed:
                raise PipelineError("cannot put a job on a closed queue")
            if self._queue.qsize() >= self._capacity:
                raise PipelineError(f"job queue is full (capacity {self._capacity})")
            self._queue.put_nowait(job)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    def claim(self) -> Optional[Job]:
        """Block until a job is available. Returns None once closed and drained."""
        item = self._queue.get()
        if item is _CLOSED:
            # Put the marker back so the next worker sees it too
            self._queue.put(item)
            return None
        return item


class ResultChannel:
    """Hand-off from workers to the collector, sized so sends never block."""

    def __init__(self, capacity: int):
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=capacity + 1)

    def send(self, result: Result) -> None:
        self._queue.put(result)

    def close(self) -> None:
        self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[Result]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            yield item


def select_candidate(candidates: Sequence[StationCandidate], hint: str) -> Optional[StationCandidate]:
    """
    Pick the station to use among same-named candidates.

    With a hint, a line match anywhere in the list wins over a prefecture
    match. Without a hint, the first candidate is used.
    """
    if not hint:
        return candidates[0] if candidates else None
    for candidate in candidates:
        if candidate.line == hint:
            return candidate
    for candidate in candidates:
        if candidate.prefecture == hint:
            return candidate
    return None


def resolve_item(resolver: Resolver, job: Job) -> Result:
    """Run parse -> station lookup -> selection -> address lookup for one job."""
    query = parse_station_field(first_field(job.record))
    if not query.name:
        return Result(job.index, Outcome.NO_MATCH, error="empty station name")

    try:
        candidates = resolver.lookup_station(query.name)
    except ResolverError as e:
        return Result(job.index, Outcome.FAILED, error=str(e))

    candidate = select_candidate(candidates, query.hint)
    if candidate is None:
        if query.hint:
            reason = f"no station '{query.name}' on line or in prefecture '{query.hint}'"
        else:
            reason = f"no station named '{query.name}'"
        return Result(job.index, Outcome.NO_MATCH, error=reason)

    try:
        address = resolver.lookup_address(candidate.postal)
    except ResolverError as e:
        return Result(job.index, Outcome.FAILED, error=str(e))

    return Result(job.index, Outcome.RESOLVED, value=address)


class ResolutionPipeline:
    """Resolve a batch of raw records with a fixed pool of worker threads."""

    def __init__(self, resolver: Resolver, workers: int = DEFAULT_WORKERS):
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.resolver = resolver
        self.workers = workers

    def run(self, records: Sequence[Sequence[str]]) -> BatchResult:
        """
        Resolve every record and return Results in input order.

        Args:
            records: Data rows (header already removed); the first field of
                each row is the raw station field

        Returns:
            BatchResult whose i-th Result belongs to records[i]

        Raises:
            PipelineError: If the one-Result-per-record invariant is broken
        """
        logger = get_logger()
        total = len(records)
        jobs = JobQueue(total)
        channel = ResultChannel(total)

        logger.info("Starting batch", items=total, workers=self.workers)
        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="resolver") as pool:
            futures = [pool.submit(self._work, jobs, channel) for _ in range(self.workers)]

            try:
                for index, record in enumerate(records):
                    jobs.put(Job(index, tuple(record)))
            finally:
                # Workers only exit once the queue is closed
                jobs.close()

            closer = threading.Thread(
                target=self._close_when_done,
                args=(futures, channel),
                name="result-closer",
                daemon=True,
            )
            closer.start()
            slots = self._collect(channel, total)
            closer.join()

        # Surface a worker that died outside the per-item guard
        for future in futures:
            future.result()

        batch = BatchResult(self._check(slots))
        logger.info(
            "Batch complete",
            resolved=batch.count(Outcome.RESOLVED),
            no_match=batch.count(Outcome.NO_MATCH),
            failed=batch.count(Outcome.FAILED),
        )
        return batch

    def _work(self, jobs: JobQueue, channel: ResultChannel) -> None:
        while True:
            job = jobs.claim()
            if job is None:
                return
            channel.send(self._resolve(job))

    def _resolve(self, job: Job) -> Result:
        logger = get_logger()
        logger.record_item_attempt()
        try:
            result = resolve_item(self.resolver, job)
        except Exception as e:
            logger.error("Unexpected error while resolving", index=job.index, error=repr(e))
            logger.record_item_failure(type(e).__name__)
            return Result(job.index, Outcome.FAILED, error=repr(e))

        if result.outcome is Outcome.RESOLVED:
            logger.record_item_resolved()
            logger.debug("Resolved", index=job.index, address=result.value)
        elif result.outcome is Outcome.NO_MATCH:
            logger.record_item_no_match()
            logger.info("No match", index=job.index, reason=result.error)
        else:
            logger.record_item_failure("ResolverError")
            logger.warning("Lookup failed", index=job.index, error=result.error)
        return result

    @staticmethod
    def _close_when_done(futures: List[Future], channel: ResultChannel) -> None:
        wait(futures)
        channel.close()

    @staticmethod
    def _collect(channel: ResultChannel, total: int) -> List[Optional[Result]]:
        slots: List[Optional[Result]] = [None] * total
        for result in channel:
            if not 0 <= result.index < total:
                raise PipelineError(f"result index {result.index} outside batch of {total}")
            if slots[result.index] is not None:
                raise PipelineError(f"duplicate result for index {result.index}")
            slots[result.index] = result
        return slots

    @staticmethod
    def _check(slots: List[Optional[Result]]) -> List[Result]:
        missing = [i for i, slot in enumerate(slots) if slot is None]
        if missing:
            raise PipelineError(f"no result for indexes {missing}")
        return slots  # type: ignore[return-value]


def resolve_batch(
    resolver: Resolver,
    records: Sequence[Sequence[str]],
    workers: int = DEFAULT_WORKERS,
) -> BatchResult:
    return ResolutionPipeline(resolver, workers=workers).run(records)


def resolve_one(resolver: Resolver, raw: str) -> Result:
    return resolve_item(resolver, Job(0, (raw,)))
