import pytest

CA_CRT = "-----BEGIN CERTIFICATE-----\nMIIC5zCCAc+gAwIBAg\n-----END CERTIFICATE-----\n"


@pytest.fixture()
def configmap():
    return {
        'apiVersion': 'v1',
        'kind': 'ConfigMap',
        'metadata': {
            'creationTimestamp': '2022-04-11T22:05:27Z',
            'name': 'kube-root-ca.crt',
            'namespace': 'c-m-w466b2vg',
            'resourceVersion': '36948',
            'uid': '1c497934-52cb-42ab-a613-dedfd5fb207b',
            'managedFields': [
                {
                    'apiVersion': 'v1',
                    'fieldsType': 'FieldsV1',
                    'fieldsV1': {'f:data': {'.': {}, 'f:ca.crt': {}}},
                    'manager': 'kube-controller-manager',
                    'operation': 'Update',
                    'time': '2022-04-11T22:05:27Z',
                },
            ],
        },
        'data': {
            'ca.crt': CA_CRT,
        },
    }


@pytest.fixture()
def deployment():
    return {
        'apiVersion': 'apps/v1',
        'kind': 'Deployment',
        'metadata': {
            'annotations': {
                'deployment.kubernetes.io/revision': '2',
                'meta.helm.sh/release-name': 'fleet-agent-local',
                'meta.helm.sh/release-namespace': 'cattle-fleet-local-system',
            },
            'labels': {
                'app.kubernetes.io/managed-by': 'Helm',
                'objectset.rio.cattle.io/hash': '362023f752e7f1989d8b652e029bd2c658ae7c44',
            },
            'creationTimestamp': '2022-04-11T22:05:27Z',
            'name': 'fleet-agent',
            'namespace': 'cattle-fleet-local-system',
            'resourceVersion': '36948',
            'uid': '1c497934-52cb-42ab-a613-dedfd5fb207b',
        },
        'spec': {
            'replicas': 1,
        },
    }
