"""Shared fixtures for core unit tests"""

import pytest


MANIFEST_OLD = """\
apiVersion: apps/v1
kind: Deployment
metadata:
  name: web
  namespace: default
spec:
  replicas: 2
  template:
    spec:
      containers:
        - name: web
          image: nginx:1.25
"""

MANIFEST_NEW = MANIFEST_OLD.replace("replicas: 2", "replicas: 3").replace("nginx:1.25", "nginx:1.27")


@pytest.fixture(name="manifests")
def manifests_fixture():
    return MANIFEST_OLD, MANIFEST_NEW


@pytest.fixture(name="far_apart")
def far_apart_fixture():
    """100-line document with single-line edits at lines 10 and 90."""
    old = [f"line {i}" for i in range(1, 101)]
    new = list(old)
    new[9] = "changed 10"
    new[89] = "changed 90"
    return old, new


@pytest.fixture(name="one_edit")
def one_edit_fixture():
    """20-line document ('0'..'19') with line index 10 replaced by 'X'."""
    old = [str(i) for i in range(20)]
    new = list(old)
    new[10] = "X"
    return old, new
