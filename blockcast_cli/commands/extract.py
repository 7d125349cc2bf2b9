"""
CLI Extract Command

Print the entities and search queries extracted from a claim.

Usage:
    blockcast extract "<claim>" [--source-type NEWS] [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace

from agents import AgentContext
from agents.extractor import EntityExtractor, source_queries
from core.schemas import Claim, SourceType


EXIT_SUCCESS = 0


def extract_cmd(args: Namespace) -> int:
    """Handle the extract command."""
    ctx = AgentContext.create(args.runtime_config)
    extractor = EntityExtractor(ctx.llm)

    entities = extractor.extract(Claim(text=args.claim, description=args.description))

    tailored = None
    if args.source_type:
        tailored = source_queries(entities, SourceType(args.source_type))

    if args.json:
        data = entities.model_dump(mode="json")
        if tailored is not None:
            data["source_queries"] = {args.source_type: tailored}
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return EXIT_SUCCESS

    print(f"Main subject: {entities.main_subject}")
    print(f"Context:      {entities.context}")
    print(f"Secondary:    {', '.join(entities.secondary_entities) or '-'}")
    print(f"Keywords:     {', '.join(entities.keywords) or '-'}")
    print("Search queries:")
    for query in entities.search_queries:
        print(f"  - {query}")
    if tailored is not None:
        print(f"{args.source_type} queries:")
        for query in tailored:
            print(f"  - {query}")
    return EXIT_SUCCESS
