"""
Thread pool helper for I/O-bound retrieval.

Usage:
    from verse_corpus.utils.parallel import thread_map

    pages = thread_map(fetch_language, languages, num_workers=4)
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, TypeVar

from tqdm import tqdm

T = TypeVar("T")
R = TypeVar("R")


def thread_map(
    func: Callable[[T], R],
    items: Iterable[T],
    num_workers: int = 1,
    desc: Optional[str] = None,
    show_progress: bool = False,
) -> List[R]:
    """
    Process items using ThreadPoolExecutor.

    Use for network requests, where the GIL is not a bottleneck. With a
    single worker the items are processed sequentially in the calling thread.

    Args:
        func: Function to apply to each item
        items: Iterable of items to process
        num_workers: Number of worker threads
        desc: Description for progress bar
        show_progress: Whether to show tqdm progress bar

    Returns:
        List of results in same order as input
    """
    items_list = list(items)

    if len(items_list) == 0:
        return []

    if num_workers <= 1:
        iterator = tqdm(items_list, desc=desc) if show_progress else items_list
        return [func(item) for item in iterator]

    with ThreadPoolExecutor(max_workers=num_workers) as executor:
        if show_progress:
            results = list(
                tqdm(
                    executor.map(func, items_list),
                    total=len(items_list),
                    desc=desc or "Processing",
                )
            )
        else:
            results = list(executor.map(func, items_list))

    return results


__all__ = [
    "thread_map",
]
