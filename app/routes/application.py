# ========================================
# app/routes/application.py
# ========================================

from fastapi import APIRouter, Depends, HTTPException, Query, status
from bson import ObjectId
from typing import List

from app.database import get_db, jobs_collection, applications_collection
from app.logging_config import get_logger
from app.schemas.application import (
    ApplicationCreate,
    ApplicationStatusUpdate,
    ApplicationResponse,
    ApplicationDetailResponse,
    UpdateResponse,
)
from app.schemas.job import InsertResponse
from app.utils.auth import verify_token, identity_email
from app.utils.mongo import (
    parse_object_id,
    serialize_documents,
    insert_ack,
    update_ack,
)

logger = get_logger(__name__)

router = APIRouter()

# Job fields copied onto each application when listing a user's applications
JOB_DISPLAY_FIELDS = ("title", "company", "company_logo", "status", "location")


async def attach_job_details(db, applications: List[dict]) -> List[dict]:
    """
    Copy display fields from each referenced job onto its application.

    All distinct jobs are fetched in one query. A reference to a job that
    does not exist fails the whole listing.
    """
    if not applications:
        return applications

    job_ids = {}
    for app in applications:
        raw_id = app.get("job_id")
        if not isinstance(raw_id, str) or not ObjectId.is_valid(raw_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Job {raw_id} referenced by application {app.get('_id')} not found"
            )
        job_ids[raw_id] = ObjectId(raw_id)

    jobs = await jobs_collection(db).find(
        {"_id": {"$in": list(job_ids.values())}}
    ).to_list(None)
    jobs_by_id = {str(job["_id"]): job for job in jobs}

    for app in applications:
        job = jobs_by_id.get(app["job_id"])
        if job is None:
            logger.warning(
                "Application %s references missing job %s", app.get("_id"), app["job_id"]
            )
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Job {app['job_id']} referenced by application {app.get('_id')} not found"
            )
        for field in JOB_DISPLAY_FIELDS:
            if field in job:
                app[field] = job[field]

    return applications


# ✅ 1. APPLY FOR JOB
@router.post("/job-applications", response_model=InsertResponse)
async def apply_job(application: ApplicationCreate, db=Depends(get_db)):
    """Store an application and bump the job's totalApplicant counter."""

    job_oid = parse_object_id(application.job_id, "job")

    jobs = jobs_collection(db)
    job = await jobs.find_one({"_id": job_oid})
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    result = await applications_collection(db).insert_one(
        application.model_dump(exclude_unset=True)
    )

    # Single atomic increment; a missing counter starts from 0
    updated = await jobs.update_one(
        {"_id": job_oid},
        {"$inc": {"totalApplicant": 1}}
    )
    if updated.matched_count == 0:
        logger.warning(
            "Job %s vanished before its applicant count could be updated", application.job_id
        )
    else:
        logger.info("Incremented totalApplicant for job %s", application.job_id)

    return insert_ack(result)


# ✅ 2. GET MY APPLICATIONS (requires session cookie)
@router.get(
    "/job-application",
    response_model=List[ApplicationDetailResponse],
    response_model_exclude_unset=True
)
async def get_my_applications(
    email: str = Query(..., description="Applicant email; must match the session identity"),
    identity: dict = Depends(verify_token),
    db=Depends(get_db)
):
    """Get the caller's applications joined with their jobs' current details."""

    if identity_email(identity) != email:
        logger.warning("Session identity does not match requested applicant email")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden access")

    applications = await applications_collection(db).find(
        {"applicant_email": email}
    ).to_list(None)

    applications = await attach_job_details(db, applications)
    return serialize_documents(applications)


# ✅ 3. GET APPLICATIONS FOR A JOB
@router.get(
    "/job-applications/jobs/{job_id}",
    response_model=List[ApplicationResponse],
    response_model_exclude_unset=True
)
async def get_job_applications(job_id: str, db=Depends(get_db)):
    """Applications whose job_id equals the path value (plain string match)."""

    applications = await applications_collection(db).find({"job_id": job_id}).to_list(None)
    return serialize_documents(applications)


# ✅ 4. UPDATE APPLICATION STATUS
@router.patch("/job-applications/{application_id}", response_model=UpdateResponse)
async def update_status(
    application_id: str,
    status_update: ApplicationStatusUpdate,
    db=Depends(get_db)
):
    """Set the application's status. Other body fields are ignored."""

    result = await applications_collection(db).update_one(
        {"_id": parse_object_id(application_id, "application")},
        {"$set": {"status": status_update.status}}
    )

    return update_ack(result)
