"""Rebuild the chatbot document index from the documents on disk."""

from __future__ import annotations

import argparse
import json
import sys
from collections import Counter
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from command_center.config.constants import DOC_INDEX_FILE, DOCS_DIR
from command_center.config.settings import Settings
from command_center.keyword_search.tokenizer import tokenize_document
from command_center.storage.fixture_store import FixtureStore


def build_index(store: FixtureStore, keywords_per_doc: int) -> dict:
    docs_dir = store.resolve(DOCS_DIR)
    docs = []
    for path in sorted(p for p in docs_dir.iterdir() if p.is_file()):
        text = store.read_text(f"{DOCS_DIR}/{path.name}")
        counts = Counter(tokenize_document(text))
        docs.append(
            {
                "doc_id": path.stem,
                "filename": path.name,
                "keywords": [k for k, _ in counts.most_common(keywords_per_doc)],
            }
        )
    return {"docs": docs}


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--data-dir", default=Settings().data_dir)
    parser.add_argument("--keywords", type=int, default=25)
    args = parser.parse_args()

    store = FixtureStore(args.data_dir)
    if not store.resolve(DOCS_DIR).is_dir():
        print(f"No documents found under {store.resolve(DOCS_DIR)}")
        return

    index = build_index(store, args.keywords)
    out = store.resolve(DOC_INDEX_FILE)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(index, indent=2), encoding="utf-8")
    print(f"Indexed {len(index['docs'])} documents into {out}")


if __name__ == "__main__":
    main()
