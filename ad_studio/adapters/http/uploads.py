import io
import logging
from fastapi import HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError
from ad_studio.core.domain.entities import ProductImage

logger = logging.getLogger(__name__)

async def read_product_image(upload: UploadFile, max_bytes: int) -> ProductImage:
    """Read an uploaded file and make sure it is an image the provider can take"""
    data = await upload.read()

    if not data:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    if len(data) > max_bytes:
        raise HTTPException(status_code=413, detail=f"Image exceeds the {max_bytes} byte upload limit")

    try:
        with Image.open(io.BytesIO(data)) as im:
            img_format = im.format
            im.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        logger.warning("Rejected upload that is not an image", extra={
            "upload_name": upload.filename,
            "content_type": upload.content_type,
            "error": str(e)
        })
        raise HTTPException(status_code=400, detail="Uploaded file is not a supported image")

    mime_type = upload.content_type
    if not mime_type or not mime_type.startswith("image/"):
        mime_type = Image.MIME.get(img_format or "", f"image/{(img_format or 'png').lower()}")

    logger.info("Product image received", extra={
        "upload_name": upload.filename,
        "mime_type": mime_type,
        "image_format": img_format,
        "size_bytes": len(data)
    })

    return ProductImage(data=data, mime_type=mime_type, filename=upload.filename)
