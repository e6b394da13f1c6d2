"""The request/response contract of the clinical attribute endpoints."""
from concurrent.futures import ThreadPoolExecutor

import pytest

from cancerstudyportal.db.exchange_data_formats.parameters import (
    ClinicalAttributeSortBy,
    Direction,
    PagingConstants,
    Projection,
)


def test_list_all_uses_defaults(client, service):
    response = client.get('/clinical-attributes')
    assert response.status_code == 200
    body = response.json()
    assert [item['clinicalAttributeId'] for item in body] == ['CANCER_TYPE', 'AGE']
    assert body[1]['patientAttribute'] is True
    assert 'count' not in body[0]
    assert service.called('get_all_clinical_attributes') == [(
        'get_all_clinical_attributes',
        Projection.SUMMARY,
        PagingConstants.DEFAULT_PAGE_SIZE,
        PagingConstants.DEFAULT_PAGE_NUMBER,
        None,
        Direction.ASC,
    )]


@pytest.mark.parametrize('page_size,page_number', [
    (PagingConstants.MIN_PAGE_SIZE, PagingConstants.MIN_PAGE_NUMBER),
    (50, 3),
    (PagingConstants.MAX_PAGE_SIZE, PagingConstants.MAX_PAGE_NUMBER),
])
def test_page_bounds_accepted(client, service, page_size, page_number):
    response = client.get(f'/clinical-attributes?pageSize={page_size}&pageNumber={page_number}')
    assert response.status_code == 200
    _, _, size, number, _, _ = service.called('get_all_clinical_attributes')[0]
    assert (size, number) == (page_size, page_number)


@pytest.mark.parametrize('query', [
    f'pageSize={PagingConstants.MIN_PAGE_SIZE - 1}',
    f'pageSize={PagingConstants.MAX_PAGE_SIZE + 1}',
    f'pageNumber={PagingConstants.MIN_PAGE_NUMBER - 1}',
    f'pageNumber={PagingConstants.MAX_PAGE_NUMBER + 1}',
    f'pageSize={PagingConstants.MAX_PAGE_SIZE}&pageNumber={10**20}',
    'pageSize=ten',
    'projection=EVERYTHING',
    'sortBy=attrValue',
    'direction=UP',
])
def test_invalid_parameters_rejected_before_service(client, service, query):
    response = client.get(f'/clinical-attributes?{query}')
    assert response.status_code == 400
    assert 'message' in response.json()
    assert service.calls == []


def test_sort_parameters_passed_as_members(client, service):
    response = client.get('/clinical-attributes?sortBy=displayName&direction=DESC&projection=DETAILED')
    assert response.status_code == 200
    _, projection, _, _, sort_by, direction = service.called('get_all_clinical_attributes')[0]
    assert projection is Projection.DETAILED
    assert sort_by is ClinicalAttributeSortBy.DISPLAY_NAME
    assert direction is Direction.DESC


def test_meta_projection_gives_count_header_only(client, service):
    service.total_count = 17
    response = client.get('/clinical-attributes?projection=META')
    assert response.status_code == 200
    assert response.content == b''
    assert response.headers['total-count'] == '17'
    assert service.called('get_all_clinical_attributes') == []


def test_list_in_study(client, service):
    response = client.get('/studies/acc_tcga/clinical-attributes?pageSize=5&sortBy=priority')
    assert response.status_code == 200
    assert len(response.json()) == 2
    call = service.called('get_all_clinical_attributes_in_study')[0]
    assert call[1:] == (
        'acc_tcga', Projection.SUMMARY, 5, 0, ClinicalAttributeSortBy.PRIORITY, Direction.ASC,
    )


def test_list_in_study_meta(client, service):
    response = client.get('/studies/acc_tcga/clinical-attributes?projection=META')
    assert response.status_code == 200
    assert response.content == b''
    assert response.headers['total-count'] == str(service.total_count)


def test_unknown_study_is_not_found(client):
    response = client.get('/studies/no_such_study/clinical-attributes')
    assert response.status_code == 404
    assert response.content == b''
    response = client.get('/studies/no_such_study/clinical-attributes?projection=META')
    assert response.status_code == 404
    assert 'total-count' not in response.headers


def test_get_single_attribute(client):
    response = client.get('/studies/acc_tcga/clinical-attributes/CANCER_TYPE')
    assert response.status_code == 200
    body = response.json()
    assert body['clinicalAttributeId'] == 'CANCER_TYPE'
    assert body['studyId'] == 'acc_tcga'
    assert body['displayName'] == 'Cancer Type'


def test_get_single_attribute_not_found(client):
    response = client.get('/studies/acc_tcga/clinical-attributes/NOT_AN_ATTRIBUTE')
    assert response.status_code == 404
    assert response.content == b''
    response = client.get('/studies/no_such_study/clinical-attributes/CANCER_TYPE')
    assert response.status_code == 404


def test_fetch_for_studies(client, service):
    response = client.post('/clinical-attributes/fetch', json=['acc_tcga', 'brca_tcga'])
    assert response.status_code == 200
    assert len(response.json()) == 2
    assert service.called('fetch_clinical_attributes') == [
        ('fetch_clinical_attributes', ['acc_tcga', 'brca_tcga'], Projection.SUMMARY),
    ]


def test_fetch_for_studies_meta(client, service):
    response = client.post('/clinical-attributes/fetch?projection=META', json=['acc_tcga'])
    assert response.status_code == 200
    assert response.content == b''
    assert response.headers['total-count'] == str(service.total_count)
    assert service.called('fetch_meta_clinical_attributes') == [
        ('fetch_meta_clinical_attributes', ['acc_tcga']),
    ]


@pytest.mark.parametrize('body', [[], {'studyIds': ['acc_tcga']}, 'acc_tcga'])
def test_fetch_for_studies_rejects_malformed_body(client, service, body):
    response = client.post('/clinical-attributes/fetch', json=body)
    assert response.status_code == 400
    assert service.calls == []


def test_counts_by_sample_list(client, service):
    response = client.post(
        '/clinical-attributes/counts/fetch?sortBy=clinicalAttributeId&direction=DESC',
        json={'sampleListId': 'acc_tcga_all'},
    )
    assert response.status_code == 200
    assert [item['count'] for item in response.json()] == [3, 3]
    assert service.called('by_sample_list_id') == [(
        'by_sample_list_id',
        'acc_tcga_all',
        Projection.SUMMARY,
        ClinicalAttributeSortBy.CLINICAL_ATTRIBUTE_ID,
        Direction.DESC,
    )]
    assert service.called('by_sample_ids') == []


def test_counts_by_sample_identifiers_splits_pairs_in_order(client, service):
    body = {
        'sampleIdentifiers': [
            {'studyId': 'acc_tcga', 'sampleId': 's1'},
            {'studyId': 'brca_tcga', 'sampleId': 's2'},
        ],
    }
    response = client.post('/clinical-attributes/counts/fetch', json=body)
    assert response.status_code == 200
    assert service.called('by_sample_ids') == [(
        'by_sample_ids',
        ['acc_tcga', 'brca_tcga'],
        ['s1', 's2'],
        Projection.SUMMARY,
        None,
        Direction.ASC,
    )]
    assert service.called('by_sample_list_id') == []


def test_counts_sample_list_takes_precedence(client, service):
    body = {
        'sampleListId': 'acc_tcga_all',
        'sampleIdentifiers': [{'studyId': 'acc_tcga', 'sampleId': 's1'}],
    }
    response = client.post('/clinical-attributes/counts/fetch', json=body)
    assert response.status_code == 200
    assert len(service.called('by_sample_list_id')) == 1
    assert service.called('by_sample_ids') == []


@pytest.mark.parametrize('body', [
    {},
    {'sampleIdentifiers': []},
    {'sampleIdentifiers': [{'studyId': 'acc_tcga'}]},
    ['acc_tcga'],
])
def test_counts_rejects_malformed_filter(client, service, body):
    response = client.post('/clinical-attributes/counts/fetch', json=body)
    assert response.status_code == 400
    assert service.calls == []


def test_identical_concurrent_requests_agree(client):
    url = '/studies/acc_tcga/clinical-attributes?sortBy=displayName'
    with ThreadPoolExecutor(max_workers=4) as executor:
        responses = list(executor.map(lambda _: client.get(url), range(8)))
    assert all(response.status_code == 200 for response in responses)
    assert len({response.content for response in responses}) == 1


def test_security_headers_present(client):
    response = client.get('/clinical-attributes?projection=META')
    assert response.headers['x-content-type-options'] == 'nosniff'
    assert 'content-security-policy' in response.headers
