"""The API service's endpoint handlers."""
from typing import Annotated

from fastapi import FastAPI
from fastapi import Depends
from fastapi import Request
from fastapi import Response
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from cancerstudyportal import __version__
from cancerstudyportal.db.querying import ClinicalAttributeService
from cancerstudyportal.db.querying import DatabaseClinicalAttributeService
from cancerstudyportal.db.exceptions import StudyNotFoundError
from cancerstudyportal.db.exceptions import ClinicalAttributeNotFoundError
from cancerstudyportal.db.exchange_data_formats.clinical_attributes import (
    ClinicalAttribute,
    ClinicalAttributeMeta,
    SampleListScope,
    SampleIdentifiersScope,
)
from cancerstudyportal.db.exchange_data_formats.parameters import (
    Direction,
    HeaderKeyConstants,
    PagingConstants,
    Projection,
)
from cancerstudyportal.apiserver.app.authorization import (
    CallerContext,
    StudyAccessDeniedError,
    StudyAccessGuard,
    caller_context,
    get_access_guard,
    require_read_permission,
)
from cancerstudyportal.apiserver.app.validation import (
    ValidStudyId,
    ValidClinicalAttributeId,
    ValidProjection,
    ValidPageSize,
    ValidPageNumber,
    ValidSortBy,
    ValidDirection,
    ValidStudyIdList,
    ValidClinicalAttributeFilter,
    describe_validation_error,
)
from cancerstudyportal.apiserver.app.headers import select_secure_headers
from cancerstudyportal.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)

VERSION = __version__

TITLE = 'Cancer study clinical attributes API'

DESCRIPTION = """
# What's available

This API provides access to the **clinical attribute metadata** of the cancer studies residing in
the portal database. A clinical attribute is a named field describing a clinical property of a
patient or a sample, like *Cancer Type* or *Overall Survival Status*.

You can:

* List all clinical attributes, or those of one study, with **paging** and **sorting**
* Look up a single clinical attribute of a study
* Fetch the clinical attributes of several studies at once
* Fetch the clinical attributes present in a **set of samples**, either a server-stored sample
  list or explicit sample identifiers, together with the **number of samples** having a value

Any listing can be requested with `projection=META`, in which case the response body is empty and
the number of matching records is provided in the `total-count` response header.

# Private studies

Some studies belong to a non-public collection. To read them, supply the collection's token as the
`collection` query parameter.
"""

app = FastAPI(
    title=TITLE,
    description=DESCRIPTION,
    version=VERSION,
)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=TITLE,
        version=VERSION,
        summary=TITLE,
        description=DESCRIPTION,
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema


setattr(app, 'openapi', custom_openapi)


@app.middleware("http")
async def set_secure_headers(request: Request, call_next):
    response = await call_next(request)
    await select_secure_headers(request.url.path).set_headers_async(response)
    return response


@app.exception_handler(RequestValidationError)
async def handle_invalid_request(request: Request, exception: RequestValidationError):
    message = describe_validation_error(exception)
    logger.info('Rejected request to %s: %s', request.url.path, message)
    return JSONResponse(status_code=400, content={'message': message})


@app.exception_handler(StudyNotFoundError)
async def handle_study_not_found(request: Request, exception: StudyNotFoundError):
    logger.info(exception.verbalize())
    return Response(status_code=404)


@app.exception_handler(ClinicalAttributeNotFoundError)
async def handle_clinical_attribute_not_found(
    request: Request,
    exception: ClinicalAttributeNotFoundError,
):
    logger.info(exception.verbalize())
    return Response(status_code=404)


@app.exception_handler(StudyAccessDeniedError)
async def handle_access_denied(request: Request, exception: StudyAccessDeniedError):
    return JSONResponse(status_code=403, content={'message': exception.verbalize()})


def get_clinical_attribute_service() -> ClinicalAttributeService:
    return DatabaseClinicalAttributeService()


Service = Annotated[ClinicalAttributeService, Depends(get_clinical_attribute_service)]
Guard = Annotated[StudyAccessGuard, Depends(get_access_guard)]
Caller = Annotated[CallerContext, Depends(caller_context)]


def total_count_response(meta: ClinicalAttributeMeta) -> Response:
    return Response(status_code=200, headers={HeaderKeyConstants.TOTAL_COUNT: str(meta.total_count)})


@app.get("/")
async def get_root() -> dict[str, str]:
    return {'server description': TITLE, 'version': VERSION}


@app.get(
    "/clinical-attributes",
    response_model=list[ClinicalAttribute],
    response_model_exclude_none=True,
    tags=['Clinical Attributes'],
)
async def get_all_clinical_attributes(
    service: Service,
    projection: ValidProjection = Projection.SUMMARY,
    page_size: ValidPageSize = PagingConstants.DEFAULT_PAGE_SIZE,
    page_number: ValidPageNumber = PagingConstants.DEFAULT_PAGE_NUMBER,
    sort_by: ValidSortBy = None,
    direction: ValidDirection = Direction.ASC,
) -> Response | list[ClinicalAttribute]:
    """Get all clinical attributes."""
    match projection:
        case Projection.META:
            return total_count_response(service.get_meta_clinical_attributes())
        case Projection.SUMMARY | Projection.DETAILED:
            logger.debug('Page %s (size %s) of all clinical attributes.', page_number, page_size)
            return service.get_all_clinical_attributes(
                projection, page_size, page_number, sort_by, direction,
            )


@app.get(
    "/studies/{study_id}/clinical-attributes",
    response_model=list[ClinicalAttribute],
    response_model_exclude_none=True,
    tags=['Clinical Attributes'],
)
async def get_all_clinical_attributes_in_study(
    study_id: ValidStudyId,
    service: Service,
    guard: Guard,
    caller: Caller,
    projection: ValidProjection = Projection.SUMMARY,
    page_size: ValidPageSize = PagingConstants.DEFAULT_PAGE_SIZE,
    page_number: ValidPageNumber = PagingConstants.DEFAULT_PAGE_NUMBER,
    sort_by: ValidSortBy = None,
    direction: ValidDirection = Direction.ASC,
) -> Response | list[ClinicalAttribute]:
    """Get all clinical attributes in the specified study."""
    require_read_permission(guard, [study_id], caller)
    match projection:
        case Projection.META:
            return total_count_response(service.get_meta_clinical_attributes_in_study(study_id))
        case Projection.SUMMARY | Projection.DETAILED:
            return service.get_all_clinical_attributes_in_study(
                study_id, projection, page_size, page_number, sort_by, direction,
            )


@app.get(
    "/studies/{study_id}/clinical-attributes/{clinical_attribute_id}",
    response_model=ClinicalAttribute,
    response_model_exclude_none=True,
    tags=['Clinical Attributes'],
)
async def get_clinical_attribute_in_study(
    study_id: ValidStudyId,
    clinical_attribute_id: ValidClinicalAttributeId,
    service: Service,
    guard: Guard,
    caller: Caller,
) -> ClinicalAttribute:
    """Get specified clinical attribute."""
    require_read_permission(guard, [study_id], caller)
    return service.get_clinical_attribute(study_id, clinical_attribute_id)


@app.post(
    "/clinical-attributes/fetch",
    response_model=list[ClinicalAttribute],
    response_model_exclude_none=True,
    tags=['Clinical Attributes'],
)
async def fetch_clinical_attributes(
    study_ids: ValidStudyIdList,
    service: Service,
    guard: Guard,
    caller: Caller,
    projection: ValidProjection = Projection.SUMMARY,
) -> Response | list[ClinicalAttribute]:
    """Fetch clinical attributes of the given studies."""
    require_read_permission(guard, study_ids, caller)
    match projection:
        case Projection.META:
            return total_count_response(service.fetch_meta_clinical_attributes(study_ids))
        case Projection.SUMMARY | Projection.DETAILED:
            return service.fetch_clinical_attributes(study_ids, projection)


@app.post(
    "/clinical-attributes/counts/fetch",
    response_model=list[ClinicalAttribute],
    response_model_exclude_none=True,
    tags=['Clinical Attributes'],
)
async def fetch_clinical_attributes_with_counts(
    clinical_attribute_filter: ValidClinicalAttributeFilter,
    service: Service,
    guard: Guard,
    caller: Caller,
    projection: ValidProjection = Projection.SUMMARY,
    sort_by: ValidSortBy = None,
    direction: ValidDirection = Direction.ASC,
) -> list[ClinicalAttribute]:
    """Get all clinical attributes in the specified sample identifiers or sample list, each with
    the number of those samples having a value for it. If a sample list ID is given, any sample
    identifiers are ignored.
    """
    require_read_permission(guard, guard.studies_of_filter(clinical_attribute_filter), caller)
    if clinical_attribute_filter.ignores_sample_identifiers():
        logger.debug('Sample list given, ignoring the sample identifiers also supplied.')
    match clinical_attribute_filter.scope():
        case SampleListScope(sample_list_id=sample_list_id):
            return service.get_all_clinical_attributes_in_studies_by_sample_list_id(
                sample_list_id, projection, sort_by, direction,
            )
        case SampleIdentifiersScope(study_ids=study_ids, sample_ids=sample_ids):
            return service.get_all_clinical_attributes_in_studies_by_sample_ids(
                study_ids, sample_ids, projection, sort_by, direction,
            )
    raise ValueError('Unrecognized clinical attribute filter scope.')
