"""
Image Tagging
Handle around the image classifier used to suggest tags for site photos.

The classifier itself is an external collaborator: any callable that takes
an image and returns predictions as dicts (or objects) with `label` and
`score`. It is created lazily by the injected loader on first acquire and
dropped when the last user releases it.
"""
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class ClassifierUnavailable(RuntimeError):
    """Raised when no classifier loader is configured or it is not acquired"""


class ClassifierHandle:
    """Lazily loaded, reference counted classifier"""

    def __init__(self, loader: Optional[Callable[[], Callable]] = None):
        self._loader = loader
        self._classifier = None
        self._refcount = 0
        self._lock = threading.Lock()

    @property
    def configured(self) -> bool:
        return self._loader is not None

    @property
    def loaded(self) -> bool:
        return self._classifier is not None

    @property
    def refcount(self) -> int:
        return self._refcount

    def acquire(self) -> 'ClassifierHandle':
        with self._lock:
            if self._loader is None:
                raise ClassifierUnavailable('No image classifier configured')
            if self._classifier is None:
                logger.info("Loading image classifier")
                self._classifier = self._loader()
            self._refcount += 1
        return self

    def release(self) -> None:
        with self._lock:
            if self._refcount == 0:
                raise RuntimeError('release() called more times than acquire()')
            self._refcount -= 1
            if self._refcount == 0:
                logger.info("Unloading image classifier")
                self._classifier = None

    def __enter__(self):
        return self.acquire()

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False

    def classify(self, image: Any) -> List[Dict[str, Any]]:
        """Predictions sorted by score, highest first"""
        if self._classifier is None:
            raise ClassifierUnavailable('Classifier must be acquired before use')

        result = self._classifier(image)
        if not isinstance(result, list):
            return []

        predictions = []
        for item in result:
            if isinstance(item, dict):
                label, score = item.get('label'), item.get('score')
            else:
                label, score = getattr(item, 'label', None), getattr(item, 'score', None)
            if label is None or score is None:
                continue
            predictions.append({'label': str(label), 'score': float(score)})

        return sorted(predictions, key=lambda p: p['score'], reverse=True)


def suggest_tags(predictions: List[Dict[str, Any]], min_score: float = 0.2,
                 limit: int = 3) -> List[str]:
    """
    Tag suggestions from classifier output.

    ImageNet style labels such as "palace, castle" are split on commas;
    duplicates keep their first (highest scoring) position.
    """
    tags = []
    for prediction in predictions:
        if prediction['score'] < min_score:
            continue
        for part in prediction['label'].split(','):
            tag = part.strip().lower()
            if tag and tag not in tags:
                tags.append(tag)
    return tags[:limit]
