"""Join tables linking posts to categories, tags and videos."""
from blog_cms.extensions import db


class PostCategory(db.Model):
    __tablename__ = "blog_post_categories"

    post_id = db.Column(db.Integer, db.ForeignKey("blog_posts.id", ondelete="CASCADE"), primary_key=True)
    category_id = db.Column(db.Integer, db.ForeignKey("blog_categories.id", ondelete="CASCADE"), primary_key=True, index=True)


class PostTag(db.Model):
    __tablename__ = "blog_post_tags"

    post_id = db.Column(db.Integer, db.ForeignKey("blog_posts.id", ondelete="CASCADE"), primary_key=True)
    tag_id = db.Column(db.Integer, db.ForeignKey("blog_tags.id", ondelete="CASCADE"), primary_key=True, index=True)


class PostVideo(db.Model):
    __tablename__ = "blog_post_videos"

    post_id = db.Column(db.Integer, db.ForeignKey("blog_posts.id", ondelete="CASCADE"), primary_key=True)
    video_id = db.Column(db.Integer, db.ForeignKey("blog_videos.id", ondelete="CASCADE"), primary_key=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)
