"""
Learning Agent - memory-augmented question answering.

Package structure:
- core: Config, errors, retry policy, the question loop
- memory: Vector-indexed memory store (the "brain")
- agents: Recall (retriever), search agent, review gate
- tools: Tools available to the search agent
- interfaces: Human communication adapters (terminal)
- llm: LLM provider abstraction
"""

__version__ = "0.1.0"
