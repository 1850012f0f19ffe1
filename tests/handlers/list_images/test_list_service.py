import io

from handlers.list_images.service import ListService
from handlers.update_image_position.service import PositionService
from handlers.upload_image.service import UploadService


def test_listing_orders_by_position(memory_storage, memory_metadata, memory_products) -> None:
    uploader = UploadService(
        storage=memory_storage,
        metadata=memory_metadata,
        products=memory_products,
    )
    for position in (3, 1, 2):
        uploader.upload_image(
            product_id="prod_a",
            requestor_id="vendor-a",
            file_stream=io.BytesIO(b"img"),
            filename="a.jpg",
            size=3,
            position=position,
        )

    images = ListService(metadata=memory_metadata, storage=memory_storage).list_images(
        product_id="prod_a"
    )

    assert [image.position for image in images] == [1, 2, 3]
    assert all(image.image_url.startswith("https://cdn.test/") for image in images)


def test_listing_reflects_position_updates(
    memory_storage, memory_metadata, memory_products
) -> None:
    uploader = UploadService(
        storage=memory_storage,
        metadata=memory_metadata,
        products=memory_products,
    )
    first = uploader.upload_image(
        product_id="prod_a",
        requestor_id="vendor-a",
        file_stream=io.BytesIO(b"1"),
        filename="a.png",
        size=1,
        position=0,
    )
    second = uploader.upload_image(
        product_id="prod_a",
        requestor_id="vendor-a",
        file_stream=io.BytesIO(b"2"),
        filename="b.png",
        size=1,
        position=1,
    )
    PositionService(metadata=memory_metadata, products=memory_products).update_position(
        image_id=first.id, requestor_id="vendor-a", position=9
    )

    images = ListService(metadata=memory_metadata, storage=memory_storage).list_images(
        product_id="prod_a"
    )

    assert [image.id for image in images] == [second.id, first.id]


def test_product_without_images_lists_empty(memory_storage, memory_metadata) -> None:
    service = ListService(metadata=memory_metadata, storage=memory_storage)

    assert service.list_images(product_id="prod_a") == []
