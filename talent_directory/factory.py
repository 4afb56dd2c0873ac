"""
Registry of record importers keyed by import type.

Drivers register themselves with ``@ImporterFactory.register("<type>")``
when the ``drivers`` package is imported.
"""

from collections.abc import Callable

from .interface import RecordImporter


class ImporterFactory:
    """Look up and build importers by import type"""

    _importers: dict[str, type[RecordImporter]] = {}

    @staticmethod
    def normalize(import_type: str) -> str:
        """``Exam-Results`` and ``exam_results`` name the same import type"""
        return import_type.strip().lower().replace("-", "_")

    @classmethod
    def register(
        cls, import_type: str
    ) -> Callable[[type[RecordImporter]], type[RecordImporter]]:
        """Class decorator registering an importer under ``import_type``"""

        def decorator(importer_class: type[RecordImporter]) -> type[RecordImporter]:
            cls._importers[cls.normalize(import_type)] = importer_class
            return importer_class

        return decorator

    @classmethod
    def create(cls, import_type: str) -> RecordImporter:
        """
        Build a fresh importer for ``import_type``.

        Raises:
            ValueError: If no importer is registered for the type
        """
        importer_class = cls._importers.get(cls.normalize(import_type))
        if importer_class is None:
            raise ValueError(
                f"Unknown import type '{import_type}'. "
                f"Available types: {', '.join(cls.get_available_types())}"
            )
        return importer_class()

    @classmethod
    def get_available_types(cls) -> list[str]:
        return sorted(cls._importers)

    @classmethod
    def describe(cls) -> dict[str, str]:
        """Import types mapped to their display labels"""
        return {
            import_type: cls._importers[import_type]().label
            for import_type in cls.get_available_types()
        }
