"""Describes the recipe domain. Centres around the `RecipeSyncEngine`.

- The user's recipes live in a local cache that is the source of truth.
- Every change is also sent to a remote vault, best effort. If the vault
  refuses, the change is kept locally and the recipe stays local-only.
- Samples from a public corpus can be imported, skipping names already held.
- A random meal can be looked up and, if liked, saved as a recipe.

The presentation layer only calls the engine and reads its state.
"""
