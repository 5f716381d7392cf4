import functools
import logging

import click.testing
import pytest

from kformat.cli import main

POD = """
apiVersion: v1
kind: Pod
metadata:
  name: example-pod
  namespace: example-ns
  managedFields:
    - manager: kubectl
spec:
  containers:
    - name: main
      image: busybox
"""

PODS_LIST = """
apiVersion: v1
kind: PodList
items:
  - metadata: {name: pod1, namespace: ns1}
  - metadata: {name: pod2, namespace: ns2}
"""

SCHEMAS = """
- id: pods
  group: ""
  version: v1
  resource: pods
- id: projects
  attributes:
    group: management.cattle.io
    version: v3
    resource: projects
    disallowMethods: {DELETE: true}
- id: projectRoleTemplateBindings
  group: management.cattle.io
  version: v3
  resource: projectroletemplatebindings
"""

ACCESS = """
alice:
  - verbs: [get, update]
    resources: [pods]
    namespaces: [example-ns, ns1]
  - verbs: [get, delete]
    resources: [projects.management.cattle.io]
  - verbs: [list, watch]
    resources: [projectroletemplatebindings.management.cattle.io]
    namespaces: [c-1-p-2]
"""


@pytest.fixture(autouse=True)
def srcdir(tmpdir):
    tmpdir.join('pod.yaml').write(POD)
    tmpdir.join('pods.yaml').write(PODS_LIST)
    tmpdir.join('schemas.yaml').write(SCHEMAS)
    tmpdir.join('access.yaml').write(ACCESS)
    with tmpdir.as_cwd():
        yield tmpdir


@pytest.fixture(autouse=True)
def _restore_root_logger():
    logger = logging.getLogger()
    original_handlers = logger.handlers[:]
    original_level = logger.level
    yield
    logger.handlers[:] = original_handlers
    logger.setLevel(original_level)


@pytest.fixture()
def runner():
    runner = click.testing.CliRunner()
    return runner


@pytest.fixture()
def invoke(runner):
    return functools.partial(runner.invoke, main)
