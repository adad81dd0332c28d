import logging
from datetime import date
from pathlib import Path
from typing import Optional, Union

from sqlalchemy.orm import Session

from medplanner import config
from medplanner.core.restore import RestoreEngine
from medplanner.core.snapshot import SnapshotBuilder
from medplanner.db.serialization import BackupBundle, SerializationService

logger = logging.getLogger(__name__)


def default_backup_filename(day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"MedPlanner_Backup_{day.isoformat()}.json"


class BackupService:
    """
    Export/import entry points called by the host application.

    Picking the file (save/open dialog) is done by the host; cancelling the dialog
    simply means these methods are never called. Errors (MalformedBackup,
    StoreWriteFailure, FileIOFailure) go back to the caller unchanged so it can
    show them to the user.
    """

    def __init__(
        self,
        serializer: Optional[SerializationService] = None,
        builder: Optional[SnapshotBuilder] = None,
        engine: Optional[RestoreEngine] = None
    ):
        self.serializer = serializer or SerializationService()
        self.builder = builder or SnapshotBuilder()
        self.engine = engine or RestoreEngine()

    def export_data(self, db: Session, destination: Union[str, Path, None] = None) -> Path:
        """Snapshot -> JSON -> file. A directory (or None) gets the dated default file name"""
        target = Path(destination) if destination is not None else Path(config.BACKUP_DIR)
        if target.is_dir() or destination is None:
            target = target / default_backup_filename()

        bundle = self.builder.build_snapshot(db)
        path = self.serializer.save_to_file(bundle, target)
        logger.info(f"Backup exported to {path}")
        return path

    def import_data(self, db: Session, source: Union[str, Path]) -> BackupBundle:
        """File -> JSON -> restore. The store is only touched once the file decoded cleanly"""
        bundle = self.serializer.load_from_file(source)
        logger.info(f"Importing backup {source} (version {bundle.version}, exported {bundle.export_date})")
        self.engine.restore(db, bundle)
        return bundle
