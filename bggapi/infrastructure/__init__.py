"""Infrastructure layer for talking to the BoardGameGeek API.

- **transport**: The ``Transport`` contract and its ``httpx`` implementation
- **decoding**: XML bodies to response models
"""
