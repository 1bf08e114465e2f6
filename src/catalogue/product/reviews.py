"""Review submission — command and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class SubmitReview:
    product_id: Identifier(required=True)
    user_id: Identifier(required=True)
    user_name: String(required=True, max_length=100)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: String(required=True, max_length=500)


@catalogue.command_handler(part_of=Product)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        review = product.add_review(
            user_id=command.user_id,
            user_name=command.user_name,
            rating=command.rating,
            comment=command.comment,
        )
        repo.add(product)
        return str(review.id)
