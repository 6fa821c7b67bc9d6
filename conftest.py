"""Puts the repository root on sys.path so ``services.*`` imports resolve in tests."""
