"""
Core Package.

Contains the dedent logic:
- Segment model and literal conversion
- Marker matching
- Dedent engine (indentation normalization)
- LibCST rewriter and orchestration engine
"""
