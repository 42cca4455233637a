"""
Tagger: registers image references, sends them to Clarifai as one batch and
keeps the returned tags per reference.
"""

import time
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set, Tuple
from .classifier import classify_reference
from .clarifai_client import ClarifaiClient, ServiceError
from .credentials import load_credentials
from .models import ImageInput, ReferenceKind
from .logging import get_logger, MetricsLogger


RENDER_SEPARATOR = "  |  "
KIND_LABELS = {
    ReferenceKind.REMOTE: "URL ",
    ReferenceKind.LOCAL: "Local",
}


class TagsNotFoundError(KeyError):
    """Raised when a reference has no computed tags."""
    pass


class ResultState(str, Enum):
    """State of the tag result store."""
    UNINITIALIZED = "uninitialized"
    COMPUTED = "computed"


class Tagger:
    """Collects image references and tags them with Clarifai.

    References are kept in insertion order and submitted in that order;
    outputs are paired back to references by position. A Tagger is not
    safe to share between threads without external locking.
    """

    def __init__(
        self,
        references: Optional[Iterable[str]] = None,
        keys_file: Optional[str] = None,
        client: Optional[ClarifaiClient] = None,
    ):
        self.logger = get_logger("tagger")
        self.metrics = MetricsLogger()

        if client is None:
            client = ClarifaiClient(load_credentials(keys_file))
        self.client = client

        self._registry: Dict[str, ReferenceKind] = {}
        self._results: Dict[str, Set[str]] = {}
        self.state = ResultState.UNINITIALIZED

        if references:
            self.add_many(references)

    def close(self):
        """Release the service client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def references(self) -> Dict[str, ReferenceKind]:
        """Snapshot of the registered references and their kinds."""
        return dict(self._registry)

    def kind_of(self, reference: str) -> ReferenceKind:
        """Get the classification of a registered reference."""
        return self._registry[reference]

    def add(self, reference: str) -> bool:
        """Register a single reference."""
        return self.add_many([reference])

    def add_many(self, references: Iterable[str]) -> bool:
        """Register references as local files or remote URLs.

        References that are neither are skipped; the rest are still added.

        Returns:
            True if every reference could be classified.
        """
        all_classified = True

        for reference in references:
            kind = classify_reference(reference)
            if kind is None:
                self.logger.warning(f"⚠️  Not a local file or URL, skipping: {reference!r}")
                all_classified = False
                continue
            self._registry[reference] = kind
            self.logger.debug(f"➕ Registered {kind.value} image: {reference}")

        return all_classified

    def _build_inputs(self, snapshot: List[Tuple[str, ReferenceKind]]) -> List[ImageInput]:
        inputs = []
        for reference, kind in snapshot:
            if kind is ReferenceKind.REMOTE:
                inputs.append(ImageInput.from_url(reference))
                continue
            try:
                with open(reference, "rb") as f:
                    inputs.append(ImageInput.from_bytes(f.read()))
            except OSError as e:
                self.logger.error(f"❌ Failed to read local image {reference}: {e}")
                raise ServiceError(f"Failed to read local image {reference}: {e}") from e
        return inputs

    def compute(self) -> Dict[str, Set[str]]:
        """Tag every registered reference with one batched request.

        On failure the ServiceError propagates and earlier results are left
        as they were.

        Returns:
            The updated tag results.
        """
        start_time = time.time()
        snapshot = list(self._registry.items())

        if not snapshot:
            self.logger.info("No images registered, nothing to tag")
            self.state = ResultState.COMPUTED
            return self._results

        inputs = self._build_inputs(snapshot)
        self.logger.info(f"🔄 Tagging {len(inputs)} images")
        outputs = self.client.predict(inputs)

        if len(outputs) != len(snapshot):
            # Pairing is positional; the surplus on either side is dropped
            self.logger.warning(
                f"⚠️  Sent {len(snapshot)} images but received {len(outputs)} outputs, "
                f"keeping the first {min(len(snapshot), len(outputs))}"
            )

        tags_count = 0
        for (reference, _kind), output in zip(snapshot, outputs):
            tags = output.tag_names()
            self._results[reference] = tags
            tags_count += len(tags)

        self.state = ResultState.COMPUTED
        self.metrics.log_compute(
            submitted=len(snapshot),
            tagged=min(len(snapshot), len(outputs)),
            tags_count=tags_count,
            compute_time=time.time() - start_time,
        )
        self.logger.info(f"✅ Tagged {min(len(snapshot), len(outputs))} images")
        return self._results

    def get_results(self) -> Dict[str, Set[str]]:
        """Get the tag results, computing them once if never computed.

        The stored mapping is returned, not a copy.
        """
        if self.state is ResultState.UNINITIALIZED:
            self.compute()
        return self._results

    def get_tags(self, reference: str) -> Set[str]:
        """Get the tags of one reference (the stored set, not a copy).

        Raises:
            TagsNotFoundError: If the reference has no computed tags.
        """
        try:
            return self._results[reference]
        except KeyError:
            raise TagsNotFoundError(reference) from None

    def render(self) -> str:
        """Render the results, one header line and one tag line per image."""
        return render_results(self._results, self._registry)

    def __str__(self) -> str:
        return self.render()


def render_tags(tags: Iterable[str]) -> str:
    return "[" + ", ".join(sorted(tags)) + "]"


def render_results(results: Dict[str, Set[str]], registry: Dict[str, ReferenceKind]) -> str:
    """Render tag results in insertion order."""
    parts = []
    for reference, tags in results.items():
        label = KIND_LABELS[registry[reference]]
        parts.append(f"{label}{RENDER_SEPARATOR}{reference}\n{render_tags(tags)}\n")
    return "".join(parts)


def parse_rendering(text: str) -> List[Tuple[str, Set[str]]]:
    """Parse the output of render_results back into (reference, tags) pairs."""
    lines = text.splitlines()
    if len(lines) % 2:
        raise ValueError("Rendering must have a tag line for every header line")

    pairs = []
    for header, tag_line in zip(lines[0::2], lines[1::2]):
        label, sep, reference = header.partition(RENDER_SEPARATOR)
        if not sep or label not in KIND_LABELS.values():
            raise ValueError(f"Malformed header line: {header!r}")
        if not (tag_line.startswith("[") and tag_line.endswith("]")):
            raise ValueError(f"Malformed tag line: {tag_line!r}")
        body = tag_line[1:-1]
        tags = set(body.split(", ")) if body else set()
        pairs.append((reference, tags))
    return pairs
