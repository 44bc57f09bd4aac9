#!/usr/bin/env python
import sys
from pathlib import Path

from dotenv import load_dotenv

from rentledger_backend import create_app
from rentledger_backend.importer import import_folder


def main():
    if len(sys.argv) < 2:
        print('Usage: python scripts/import_csv.py <folder> [--dry-run]')
        sys.exit(1)
    folder = Path(sys.argv[1])
    dry = ('--dry-run' in sys.argv)
    if not folder.exists():
        print(f'Folder not found: {folder}')
        sys.exit(2)

    load_dotenv()
    app = create_app()
    with app.app_context():
        counts = import_folder(app.extensions['tenant_service'], folder, dry)
        for name, count in counts.items():
            print(f'[{name}] {count} rows processed' + (' (dry-run)' if dry else ''))
        print(f'Done. {sum(counts.values())} total rows.')


if __name__ == '__main__':
    main()
