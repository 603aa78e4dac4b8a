"""
research-hub core package.

Modules
───────
models         — Pydantic data models (Document, DigestResult, SearchResponse, …)
errors         — Exception hierarchy (validation / backend / parse failures)
planner        — Query normalisation and ordered arXiv query variants
normalize      — Whitespace, control-character and abstract-length helpers
arxiv_client   — arXiv Atom API client (Backend A)
scholar_client — Semantic Scholar Graph API client (Backend B)
federated      — Concurrent fan-out across both literature backends
merger         — Cross-source title deduplication
extraction     — "parse JSON or fall back" primitive shared by every LLM call
llm            — Anthropic Messages API wrapper (prompt in, text out)
synthesis      — Topic digest prompt + DigestResult coercion
validator      — Move contract validation call site
vetting        — Consultant profile vetting call site
assembler      — Success / error response envelopes
service        — Request orchestration: search(query, category)
"""
