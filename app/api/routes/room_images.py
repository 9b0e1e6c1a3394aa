import io

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError

from app.core.dependencies import get_store, require_admin
from app.core.logging_config import get_logger
from app.core.session import AuthSession
from app.db.store import DataStore
from app.schemas.room import RoomImageOut
from app.utils.cloudinary_utils import delete_image, upload_image

router = APIRouter(prefix="/room-images", tags=["Room Images"])
logger = get_logger()

ALLOWED_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
}


def _image_out(img) -> RoomImageOut:
    return RoomImageOut(
        id=img.id,
        url=img.image_url,
        public_id=img.public_id,
        is_primary=img.is_primary,
        order_index=img.order_index,
    )


# =====================================================================
#                  CONVERT ANY IMAGE TO JPEG (AUTO-CONVERT)
# =====================================================================
def convert_to_jpeg(contents: bytes) -> bytes:
    try:
        img = Image.open(io.BytesIO(contents)).convert("RGB")
    except (UnidentifiedImageError, OSError):
        raise HTTPException(status_code=400, detail="Invalid image file")

    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=90)
    buffer.seek(0)

    return buffer.read()


# =====================================================================
#                       UPLOAD IMAGE(S)
# =====================================================================
@router.post("/{room_id}")
async def upload_room_image(
    room_id: str,
    files: list[UploadFile] = File(...),
    is_primary: bool = Form(False),
    store: DataStore = Depends(get_store),
    session: AuthSession = Depends(require_admin),
):
    if not store.first("rooms", {"id": room_id}):
        raise HTTPException(status_code=404, detail="Room not found")

    # New primary image replaces the old one
    if is_primary:
        store.update("room_images", {"room_id": room_id}, {"is_primary": False})

    next_index = len(store.query("room_images", {"room_id": room_id}))
    uploaded = []

    for file in files:
        if (file.content_type or "").lower() not in ALLOWED_TYPES:
            raise HTTPException(
                status_code=400,
                detail=f"Unsupported file type {file.content_type}. Allowed: JPEG, JPG, PNG, WEBP"
            )

        jpeg_bytes = convert_to_jpeg(await file.read())

        result = upload_image(jpeg_bytes)
        if not result:
            raise HTTPException(status_code=502, detail="Cloud upload failed")

        image = store.insert("room_images", {
            "room_id": room_id,
            "image_url": result["url"],
            "public_id": result["public_id"],
            # Only the first file of a primary upload becomes primary
            "is_primary": is_primary and not uploaded,
            "order_index": next_index,
        })
        next_index += 1
        uploaded.append(_image_out(image))

    if is_primary and uploaded:
        store.update("rooms", {"id": room_id}, {"image_url": uploaded[0].url})

    logger.bind(log_type="admin").info(f"Uploaded {len(uploaded)} image(s) for room {room_id}")
    return {"message": "Images uploaded successfully", "images": uploaded}


# =====================================================================
#                       LIST IMAGES FOR A ROOM
# =====================================================================
@router.get("/{room_id}")
def list_room_images(room_id: str, store: DataStore = Depends(get_store)):
    if not store.first("rooms", {"id": room_id}):
        raise HTTPException(status_code=404, detail="Room not found")

    images = store.query("room_images", {"room_id": room_id}, order_by="order_index")
    primary = next((img.image_url for img in images if img.is_primary), None)

    return {
        "room_id": room_id,
        "primary_image": primary,
        "images": [_image_out(img) for img in images],
    }


# =====================================================================
#                       DELETE IMAGE
# =====================================================================
@router.delete("/{image_id}")
def delete_room_image(image_id: str, store: DataStore = Depends(get_store),
                      session: AuthSession = Depends(require_admin)):
    image = store.first("room_images", {"id": image_id})
    if not image:
        raise HTTPException(status_code=404, detail="Image not found")

    if not delete_image(image.public_id):
        logger.warning(f"Cloudinary delete failed for {image.public_id}; removing record anyway")

    store.delete("room_images", {"id": image_id})
    return {"message": "Room image deleted successfully"}
