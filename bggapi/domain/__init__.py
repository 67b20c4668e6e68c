"""Request and response models for the BoardGameGeek resources."""
