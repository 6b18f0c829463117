# services/version_exporter.py
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)


def build_version_export(version, name, abbreviation, copyright=None, info=None):
    """Export artifact for a completed version, in the format the reader loads"""
    contents = version.contents
    return {
        'id': f"custom-{abbreviation.lower()}",
        'name': name,
        'nameLocal': name,
        'abbreviation': abbreviation,
        'abbreviationLocal': abbreviation,
        'language': {
            'id': 'eng',
            'name': 'English',
            'nameLocal': 'English',
            'script': 'Latin',
            'scriptDirection': 'LTR',
        },
        'countries': [{
            'id': 'WLD',
            'name': 'World',
            'nameLocal': 'World',
        }],
        'type': 'text',
        'updatedAt': datetime.now(timezone.utc).isoformat(),
        'copyright': copyright or '',
        'info': info or '',
        'contents': contents,
    }


def write_version_export(export, export_dir):
    """Write the artifact to <export_dir>/<abbreviation>.json and return the path"""
    export_dir = Path(export_dir)
    export_dir.mkdir(parents=True, exist_ok=True)
    export_path = export_dir / f"{export['abbreviation'].lower()}.json"
    with open(export_path, 'w', encoding='utf-8') as f:
        json.dump(export, f, indent=2, ensure_ascii=False)

    logger.info(f"Version exported successfully to {export_path}")
    logger.info(f"Total chapters: {len(export['contents'])}")
    return export_path
