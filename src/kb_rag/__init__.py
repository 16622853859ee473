"""Knowledge-base question answering: adaptive retrieval and streamed answer normalization."""

__version__ = "0.1.0"
